from __future__ import annotations
from typing import List, Sequence
import numpy as np
from rules import OFF_STATE, ON_STATE, Rule


class StorageError(RuntimeError):
    """State storage could not be acquired. Not retryable."""


def encode_state(symbols: str) -> List[int]:
    '''
    "*.." -> [1, 0, 0]
    '''
    cells = []
    for ch in symbols:
        if ch == ON_STATE:
            cells.append(1)
        elif ch == OFF_STATE:
            cells.append(0)
        else:
            raise ValueError(f"invalid cell symbol {ch!r}")
    return cells

def decode_state(cells: Sequence[int]) -> str:
    return "".join(ON_STATE if c else OFF_STATE for c in cells)

def step_1d(state: Sequence[int], rule: Rule) -> List[int]:
    '''
    One ECA step on a ring: the leftmost and rightmost cells are neighbors.
    '''
    n = len(state)
    next_state = [0] * n
    for i, s in enumerate(state):
        left = state[(i - 1 + n) % n]
        right = state[(i + 1) % n]
        next_state[i] = rule(left, s, right)
    return next_state

def simulate(state: Sequence[int], rule: Rule, t: int = 1) -> List[int]:
    curr = list(state)
    for i in range(t):
        curr = step_1d(curr, rule)
    return curr


class StateSequence:
    """
    Append-only, time-indexed history of CA states.

    Storage for every time step is acquired up front as a (capacity, size)
    uint8 matrix; rows past ``len(self)`` are not yet computed. Indexing
    returns the state as a ``*``/``.`` string, ``cells`` returns the 0/1 list.
    """

    def __init__(self, capacity: int, size: int):
        try:
            self._cells = np.zeros((capacity, size), dtype=np.uint8)
        except (MemoryError, ValueError) as e:
            raise StorageError(f"could not allocate {capacity} states of {size} cells: {e}") from e
        self.size = size
        self._length = 0

    @property
    def capacity(self) -> int:
        return self._cells.shape[0]

    def __len__(self) -> int:
        return self._length

    def _check_index(self, t: int) -> None:
        if not (0 <= t < self._length):
            raise IndexError(f"no state computed for t={t} (have 0..{self._length - 1})")

    def __getitem__(self, t: int) -> str:
        return decode_state(self.cells(t))

    def cells(self, t: int) -> List[int]:
        self._check_index(t)
        return self._cells[t].tolist()

    def append(self, cells: Sequence[int]) -> None:
        if len(cells) != self.size:
            raise ValueError(f"state has {len(cells)} cells, expected {self.size}")
        if self._length >= self.capacity:
            raise StorageError(f"state storage exhausted at t={self._length} (capacity {self.capacity})")
        self._cells[self._length] = cells
        self._length += 1


def allocate_states(total_steps: int, initial_state: str) -> StateSequence:
    """Acquire storage for times 0..total_steps and seed time 0."""
    if total_steps < 0:
        raise StorageError(f"cannot allocate storage for {total_steps} steps")
    states = StateSequence(total_steps + 1, len(initial_state))
    states.append(encode_state(initial_state))
    return states

def evolve_range(states: StateSequence, start_time: int, end_time: int, rule: Rule) -> None:
    '''
    Fill states[start_time + 1 .. end_time] by stepping from states[start_time].
    Already-computed steps are never recomputed.
    '''
    for t in range(start_time, end_time):
        if t + 1 < len(states):
            raise ValueError(f"state at t={t + 1} already computed")
        states.append(step_1d(states.cells(t), rule))
