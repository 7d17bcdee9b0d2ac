from __future__ import annotations
from dataclasses import dataclass
from typing import List, Protocol, Tuple

ON_STATE = "*"
OFF_STATE = "."
NUM_NEIGHBORHOODS = 8 # radius-1, 2-state: 2**3 (left, current, right) patterns

RULE_184 = 184
RULE_232 = 232


class Rule(Protocol):
    rule: int

    def __call__(self, left: int, current: int, right: int) -> int:
        ...


def neighborhood_code(left: int, current: int, right: int) -> int:
    """Pack a (left, current, right) triple of 0/1 cells into a 3-bit code."""
    return (left << 2) | (current << 1) | right


@dataclass(frozen=True)
class Neighborhood:
    left: int
    current: int
    right: int
    new: int

    @classmethod
    def from_code(cls, code: int, new: int) -> Neighborhood:
        return cls(code >> 2, (code >> 1) & 1, code & 1, new)


@dataclass(frozen=True)
class RuleTable:
    """
    Wolfram-numbered elementary CA rule, stored as an 8-entry lookup:
    table[c] is the next state for neighborhood code c = 4*left + 2*current + right,
    i.e. bit c of the rule number.
    """
    rule: int
    table: Tuple[int, ...]

    def __post_init__(self):
        if len(self.table) != NUM_NEIGHBORHOODS:
            raise ValueError(f"rule table must have {NUM_NEIGHBORHOODS} entries, got {len(self.table)}")
        if any(bit not in (0, 1) for bit in self.table):
            raise ValueError("rule table entries must be 0 or 1")

    def __call__(self, left: int, current: int, right: int) -> int:
        return self.table[neighborhood_code(left, current, right)]

    def lookup(self, code: int) -> int:
        if not (0 <= code < NUM_NEIGHBORHOODS):
            raise ValueError(f"invalid neighborhood code {code}")
        return self.table[code]

    def neighborhoods(self) -> List[Neighborhood]:
        """The 8 (left, current, right) -> new pairs in code order 0..7."""
        return [Neighborhood.from_code(code, bit) for code, bit in enumerate(self.table)]

    @classmethod
    def from_int(cls, code: int) -> RuleTable:
        """Construct from a rule number in 0..255, e.g. 30, 110, 184."""
        if not (0 <= code < 2 ** NUM_NEIGHBORHOODS):
            raise ValueError(f"rule number must be in 0..{2 ** NUM_NEIGHBORHOODS - 1}, got {code}")
        return cls(code, tuple((code >> c) & 1 for c in range(NUM_NEIGHBORHOODS)))
