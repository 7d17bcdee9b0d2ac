"""
report.py

Text rendering for the staged CA run. Every function returns a list of
lines without trailing newlines; writing them out is the caller's job.

A "sequence" is anything indexable by time step that yields ``*``/``.``
strings, e.g. a simulate.StateSequence or a plain list.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple
from rules import ON_STATE, OFF_STATE, RuleTable

SEPARATOR = "-------------------------------------"
THE_END = "==THE END============================"


def stage_header(stage: int) -> str:
    return f"==STAGE {stage}============================"

def format_state_line(t: int, state: str) -> str:
    return f"{t:4d}: {state}"

def render_states(states: Sequence[str], start_time: int, end_time: int) -> List[str]:
    """One line per time step in start_time..end_time (inclusive)."""
    return [format_state_line(t, states[t]) for t in range(start_time, end_time + 1)]

def render_rule_table(rule: RuleTable) -> List[str]:
    """
    The two rule lines of the setup report: the 8 neighborhoods in code
    order, then the new state under each one.
    """
    pairs = rule.neighborhoods()
    codes = "".join(f" {p.left}{p.current}{p.right}" for p in pairs)
    bits = "".join(f"  {p.new} " for p in pairs)
    return [codes, bits]

def count_on_off(states: Sequence[str], start_time: int, end_time: int, cell_position: int) -> Tuple[int, int]:
    on = off = 0
    for t in range(start_time, end_time + 1):
        if states[t][cell_position] == ON_STATE:
            on += 1
        else:
            off += 1
    return on, off

def render_on_off_report(states: Sequence[str], start_time: int, end_time: int, cell_position: int) -> List[str]:
    on, off = count_on_off(states, start_time, end_time, cell_position)
    return [f"#ON={on} #OFF={off} CELL#{cell_position} START@{start_time}"]

def classify_density(final_state: str) -> str:
    '''
    After rule 184 has sorted the cells into traffic-jam blocks and rule 232
    has spread the majority, the ring is all ON, all OFF, or alternating.
    Looking at cells 0 and 1 is therefore enough: ">" if both ON, "<" if both
    OFF, "=" otherwise. Not a general density test.
    A single cell has no second cell to agree with and classifies as "=".
    '''
    if len(final_state) < 2:
        return "="
    first, second = final_state[0], final_state[1]
    if first == ON_STATE and second == ON_STATE:
        return ">"
    if first == OFF_STATE and second == OFF_STATE:
        return "<"
    return "="

def render_density_classification(states: Sequence[str], classify_time: int, final_time: int) -> List[str]:
    op = classify_density(states[final_time])
    return [
        format_state_line(classify_time, states[classify_time]),
        f"AT T={classify_time}: #ON/#CELLS {op} 1/2",
    ]
