"""
configuration.py

Read the run configuration, either from the plain input stream

    5
    150
    *....
    2
    0,0
    0,2

(size, rule, initial state, time steps, then ``cell,start`` for stage 1 and
stage 2) or from a YAML file:

    size: 5
    rule: 150
    initial_state: "*...."
    time_steps: 2
    stage1: {cell_position: 0, start_time: 0}
    stage2: {cell_position: 0, start_time: 2}
"""

from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass
from typing import Any, Dict, TextIO, Tuple
import yaml

from rules import NUM_NEIGHBORHOODS, OFF_STATE, ON_STATE

_PAIR_RE = re.compile(r"(-?\d+)\s*,\s*(-?\d+)")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CAConfig:
    size: int
    rule: int
    initial_state: str
    time_steps: int
    stage1_cell_position: int
    stage1_start_time: int
    stage2_cell_position: int
    stage2_start_time: int

    def validate(self) -> CAConfig:
        if self.size < 1:
            raise ConfigError(f"size must be at least 1, got {self.size}")
        if not (0 <= self.rule < 2 ** NUM_NEIGHBORHOODS):
            raise ConfigError(f"rule must be in 0..{2 ** NUM_NEIGHBORHOODS - 1}, got {self.rule}")
        if len(self.initial_state) != self.size:
            raise ConfigError(
                f"initial state has {len(self.initial_state)} cells, expected {self.size}"
            )
        bad = set(self.initial_state) - {ON_STATE, OFF_STATE}
        if bad:
            raise ConfigError(f"initial state contains invalid symbols: {''.join(sorted(bad))}")
        if self.time_steps < 0:
            raise ConfigError(f"time steps must be non-negative, got {self.time_steps}")
        for stage, pos, start in (
            (1, self.stage1_cell_position, self.stage1_start_time),
            (2, self.stage2_cell_position, self.stage2_start_time),
        ):
            if not (0 <= pos < self.size):
                raise ConfigError(f"stage {stage} cell position {pos} outside 0..{self.size - 1}")
            if start < 0:
                raise ConfigError(f"stage {stage} start time must be non-negative, got {start}")
        return self


def _int(token: str, name: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigError(f"{name}: expected an integer, got {token!r}") from None

def parse_config(text: str) -> CAConfig:
    """Parse the whitespace-delimited input stream format."""
    head = text.split(maxsplit=4)
    if len(head) < 5:
        raise ConfigError("input ended early: expected size, rule, initial state, time steps and two cell,start pairs")
    size, rule, initial, time_steps, rest = head

    pairs = _PAIR_RE.findall(rest)
    if len(pairs) < 2:
        raise ConfigError("expected two 'cell,start' pairs after the time steps")
    (pos1, start1), (pos2, start2) = pairs[:2]

    return CAConfig(
        size=_int(size, "size"),
        rule=_int(rule, "rule"),
        initial_state=initial,
        time_steps=_int(time_steps, "time steps"),
        stage1_cell_position=int(pos1),
        stage1_start_time=int(start1),
        stage2_cell_position=int(pos2),
        stage2_start_time=int(start2),
    ).validate()

def read_config(stream: TextIO) -> CAConfig:
    return parse_config(stream.read())


def _stage(data: Dict[str, Any], key: str) -> Tuple[int, int]:
    block = data.get(key)
    if not isinstance(block, dict):
        raise ConfigError(f"missing '{key}' block with cell_position and start_time")
    try:
        return int(block["cell_position"]), int(block["start_time"])
    except KeyError as e:
        raise ConfigError(f"'{key}' is missing {e.args[0]}") from None
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' values must be integers") from None

def load_yaml_config(path: pathlib.Path) -> CAConfig:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    try:
        size, rule, time_steps = (int(data[k]) for k in ("size", "rule", "time_steps"))
        initial = str(data["initial_state"])
    except KeyError as e:
        raise ConfigError(f"{path}: missing key {e.args[0]}") from None
    except (TypeError, ValueError):
        raise ConfigError(f"{path}: size, rule and time_steps must be integers") from None
    pos1, start1 = _stage(data, "stage1")
    pos2, start2 = _stage(data, "stage2")

    return CAConfig(
        size=size,
        rule=rule,
        initial_state=initial,
        time_steps=time_steps,
        stage1_cell_position=pos1,
        stage1_start_time=start1,
        stage2_cell_position=pos2,
        stage2_start_time=start2,
    ).validate()
