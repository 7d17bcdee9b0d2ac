from __future__ import annotations

import json
import pathlib
import time

from configuration import CAConfig

# Default location of the run log
LOG_PATH = pathlib.Path("logs") / "runs.log"


def log_run(config: CAConfig, steps_184: int, steps_232: int, density: str, *, log_file: pathlib.Path = LOG_PATH) -> None:
    """Append the run's size, rule, stage lengths and density verdict as one JSON line."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    entry = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "size": config.size,
        "rule": config.rule,
        "time_steps": config.time_steps,
        "steps_184": steps_184,
        "steps_232": steps_232,
        "total_steps": config.time_steps + steps_184 + steps_232,
        "density": density,
    }
    with log_file.open("a", encoding="utf-8") as fp:
        fp.write(json.dumps(entry, ensure_ascii=False) + "\n")
