from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import IllegalPourError, InvalidSlotError
from .state import EMPTY, UNKNOWN, SlotState

CAPACITY = 4


class Tube:
    """A four-slot container, index 0 at the bottom and 3 at the top.

    Tubes are expected to be filled from the bottom without gaps. Direct edits
    may break that; such tubes are representable but `pour_to` only reasons
    about the empty run at the top and the colour run right below it.
    """

    __slots__ = ("_slots",)

    def __init__(self, slots: Optional[Iterable[SlotState]] = None) -> None:
        if slots is None:
            self._slots: List[SlotState] = [UNKNOWN] * CAPACITY
            return
        self._slots = list(slots)
        if len(self._slots) != CAPACITY:
            raise ValueError(f"A tube holds exactly {CAPACITY} slots (got {len(self._slots)})")
        for s in self._slots:
            if not isinstance(s, SlotState):
                raise TypeError(f"Expected SlotState, got {type(s).__name__}")

    @classmethod
    def empty(cls) -> "Tube":
        return cls([EMPTY] * CAPACITY)

    def copy(self) -> "Tube":
        return Tube(self._slots)

    def get(self, idx: int) -> SlotState:
        _check_slot(idx)
        return self._slots[idx]

    def set(self, idx: int, state: SlotState) -> None:
        _check_slot(idx)
        self._slots[idx] = state

    def slots(self) -> Tuple[SlotState, ...]:
        return tuple(self._slots)

    def num_free(self) -> int:
        """Empty slots counted down from the top until the first non-empty one."""
        free = 0
        for s in reversed(self._slots):
            if not s.is_empty:
                break
            free += 1
        return free

    def top(self) -> SlotState:
        free = self.num_free()
        if free == CAPACITY:
            return EMPTY
        return self._slots[CAPACITY - 1 - free]

    def num_to_pour(self) -> int:
        """Size of the same-colour run sitting on top of the tube."""
        top = self.top()
        if not top.is_water:
            return 0
        count = 0
        for idx in range(CAPACITY - 1 - self.num_free(), -1, -1):
            if self._slots[idx] != top:
                break
            count += 1
        return count

    def is_empty(self) -> bool:
        return self.num_free() == CAPACITY

    def is_complete(self) -> bool:
        return self.num_to_pour() == CAPACITY

    def can_pour_to(self, other: "Tube") -> bool:
        src_top = self.top()
        dst_top = other.top()
        if src_top.is_unknown or dst_top.is_unknown or src_top.is_empty:
            return False
        if dst_top.is_empty:
            return True
        if src_top == dst_top:
            return self.num_to_pour() <= other.num_free()
        return False

    def pour_to(self, other: "Tube") -> None:
        if not self.can_pour_to(other):
            raise IllegalPourError()
        amount = self.num_to_pour()
        top = self.top()

        start = CAPACITY - 1 - self.num_free()
        for idx in range(start, start - amount, -1):
            self._slots[idx] = EMPTY

        first_free = CAPACITY - other.num_free()
        for idx in range(first_free, first_free + amount):
            other._slots[idx] = top

    def __iter__(self) -> Iterator[SlotState]:
        return iter(self._slots)

    def __len__(self) -> int:
        return CAPACITY

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Tube):
            return NotImplemented
        return self._slots == other._slots

    def __hash__(self) -> int:
        return hash(tuple(self._slots))

    def __repr__(self) -> str:
        return f"Tube([{', '.join(s.to_token() for s in self._slots)}])"


def _check_slot(idx: int) -> None:
    if not 0 <= idx < CAPACITY:
        raise InvalidSlotError(idx)
