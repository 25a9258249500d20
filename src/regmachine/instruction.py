"""Register machine instructions.

The instruction set is closed and has three cases:

    Increment(i, j)             Ri+ -> Lj
    DecrementOrBranch(i, j, k)  Ri- -> Lj, Lk
    Halt()                      HALT

Each case is a frozen dataclass; Instruction is their Union.
"""

from dataclasses import dataclass, fields
from typing import Union


def _validate_fields(instruction) -> None:
    for f in fields(instruction):
        value = getattr(instruction, f.name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{type(instruction).__name__}.{f.name} must be an int, "
                f"got {type(value).__name__}"
            )
        if value < 0:
            raise ValueError(
                f"{type(instruction).__name__}.{f.name} must be a natural number, got {value}"
            )


@dataclass(frozen=True)
class Increment:
    """Add 1 to a register, then jump.

    Attributes:
        register: Register index to increment
        next_label: Label to jump to afterwards
    """
    register: int
    next_label: int

    def __post_init__(self):
        _validate_fields(self)

    def __str__(self) -> str:
        return f"R{self.register}+ -> L{self.next_label}"


@dataclass(frozen=True)
class DecrementOrBranch:
    """Decrement a register if nonzero, branching on whether it was zero.

    Attributes:
        register: Register index to test and decrement
        success_label: Label taken when the register was nonzero
        zero_label: Label taken when the register was zero
    """
    register: int
    success_label: int
    zero_label: int

    def __post_init__(self):
        _validate_fields(self)

    def __str__(self) -> str:
        return f"R{self.register}- -> L{self.success_label}, L{self.zero_label}"


@dataclass(frozen=True)
class Halt:
    """Stop execution."""

    def __str__(self) -> str:
        return "HALT"


Instruction = Union[Increment, DecrementOrBranch, Halt]

INSTRUCTION_TYPES = (Increment, DecrementOrBranch, Halt)


def is_instruction(value) -> bool:
    """Check whether value is one of the three instruction cases."""
    return isinstance(value, INSTRUCTION_TYPES)
