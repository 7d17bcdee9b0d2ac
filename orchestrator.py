#!/usr/bin/env python
"""
orchestrator.py
---------------
Run the staged elementary CA report:

0. Print the configuration and the decoded rule table
1. Evolve the initial state for ``time_steps`` steps under the given rule,
   print every state and an ON/OFF tally for one cell
2. Continue with rule 184 for (size-2)//2 steps, then rule 232 for
   (size-1)//2 steps, print both runs, a second ON/OFF tally and the
   density classification of the stage-1 final state

Example
-------
python orchestrator.py < input.txt
python orchestrator.py --config run.yaml --output out/report.txt
"""
from __future__ import annotations

import argparse
import pathlib
import sys
from dataclasses import dataclass
from typing import List, TextIO

from configuration import CAConfig, ConfigError, load_yaml_config, read_config
from report import (
    SEPARATOR,
    THE_END,
    classify_density,
    format_state_line,
    render_density_classification,
    render_on_off_report,
    render_rule_table,
    render_states,
    stage_header,
)
from rules import RULE_184, RULE_232, RuleTable
from run_logger import log_run
from simulate import StorageError, allocate_states, evolve_range


@dataclass(frozen=True)
class StageStepCounts:
    time_steps: int
    steps_184: int
    steps_232: int

    @property
    def total_steps(self) -> int:
        return self.time_steps + self.steps_184 + self.steps_232

    @classmethod
    def from_config(cls, config: CAConfig) -> StageStepCounts:
        # a single cell gets no rule 184 steps
        steps_184 = max((config.size - 2) // 2, 0)
        steps_232 = (config.size - 1) // 2
        return cls(config.time_steps, steps_184, steps_232)


class StageOrchestrator:
    """
    Owns the three rule tables and the state history for one run.

    Storage for all stages is acquired in the constructor, so a StorageError
    surfaces before any report line is produced.
    """

    def __init__(self, config: CAConfig):
        self.config = config
        self.rule_table = RuleTable.from_int(config.rule)
        self.rule_184 = RuleTable.from_int(RULE_184)
        self.rule_232 = RuleTable.from_int(RULE_232)
        self.counts = StageStepCounts.from_config(config)
        self.states = allocate_states(self.counts.total_steps, config.initial_state)
        self.density: str | None = None

    def stage_0(self) -> List[str]:
        cfg = self.config
        return [
            stage_header(0),
            f"SIZE: {cfg.size}",
            f"RULE: {cfg.rule}",
            SEPARATOR,
            *render_rule_table(self.rule_table),
            SEPARATOR,
            format_state_line(0, self.states[0]),
        ]

    def stage_1(self) -> List[str]:
        cfg = self.config
        evolve_range(self.states, 0, cfg.time_steps, self.rule_table)
        return [
            stage_header(1),
            *render_states(self.states, 0, cfg.time_steps),
            SEPARATOR,
            *render_on_off_report(self.states, cfg.stage1_start_time, cfg.time_steps, cfg.stage1_cell_position),
        ]

    def stage_2(self) -> List[str]:
        cfg, counts = self.config, self.counts
        start_184 = cfg.time_steps
        start_232 = start_184 + counts.steps_184
        total = counts.total_steps

        lines = [stage_header(2), f"RULE: {RULE_184}; STEPS: {counts.steps_184}.", SEPARATOR]
        evolve_range(self.states, start_184, start_232, self.rule_184)
        lines += render_states(self.states, start_184, start_232)
        lines.append(SEPARATOR)

        lines += [f"RULE: {RULE_232}; STEPS: {counts.steps_232}.", SEPARATOR]
        evolve_range(self.states, start_232, total, self.rule_232)
        lines += render_states(self.states, start_232, total)
        lines.append(SEPARATOR)

        lines += render_on_off_report(self.states, cfg.stage2_start_time, total, cfg.stage2_cell_position)
        lines.append(SEPARATOR)
        lines += render_density_classification(self.states, cfg.time_steps, total)
        self.density = classify_density(self.states[total])
        return lines

    def report(self) -> List[str]:
        return [*self.stage_0(), *self.stage_1(), *self.stage_2(), THE_END]


def write_report(lines: List[str], out: TextIO) -> None:
    for line in lines:
        print(line, file=out)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Run a staged elementary CA (given rule, then rules 184 and 232).",
        epilog="Exit status: 0 on success, 1 if state storage cannot be allocated, 2 on invalid configuration.",
    )
    src = p.add_mutually_exclusive_group()
    src.add_argument("--input", type=pathlib.Path, help="Read the configuration stream from this file instead of stdin.")
    src.add_argument("--config", type=pathlib.Path, help="Read the configuration from a YAML file.")
    p.add_argument("--output", type=pathlib.Path, help="Write the report here instead of stdout.")
    p.add_argument("--log-file", type=pathlib.Path, help="Append a JSON record of the run to this file.")
    return p


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    try:
        if args.config is not None:
            config = load_yaml_config(args.config)
        elif args.input is not None:
            with args.input.open(encoding="utf-8") as f:
                config = read_config(f)
        else:
            config = read_config(sys.stdin)
        runner = StageOrchestrator(config)
    except (ConfigError, OSError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    except StorageError as e:
        print(f"Storage allocation failed: {e}", file=sys.stderr)
        sys.exit(1)

    lines = runner.report()

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with args.output.open("w", encoding="utf-8") as f:
            write_report(lines, f)
    else:
        write_report(lines, sys.stdout)

    if args.log_file is not None:
        log_run(config, runner.counts.steps_184, runner.counts.steps_232, runner.density, log_file=args.log_file)


if __name__ == "__main__":
    main()
