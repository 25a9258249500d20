"""MachineState: state representation for the register machine.

State Components:
    - Label: Current program counter (index into the program)
    - Registers: Sparse mapping from register index to natural value;
      an absent register reads as 0
    - Halted: Execution termination flag
    - Step count: Total executed transitions

All state mutations return new state objects, so every state seen at a
step boundary stays valid for tracing.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple


def _check_natural(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be a natural number, got {value}")


@dataclass
class MachineState:
    """Register machine state representation.

    Attributes:
        label: Current label (index of the next instruction to execute)
        registers: Dictionary mapping register index to natural value
        halted: Whether the machine has stopped
        step_count: Number of transitions executed
    """
    label: int = 0
    registers: Dict[int, int] = field(default_factory=dict)
    halted: bool = False
    step_count: int = 0

    @classmethod
    def from_pair(cls, pair: Tuple[int, Mapping[int, int]]) -> "MachineState":
        """Build a state from a (label, registers) pair.

        The registers mapping is copied; the caller's object is never
        modified.
        """
        label, registers = pair
        return cls(label=label, registers=dict(registers))

    def as_pair(self) -> Tuple[int, Dict[int, int]]:
        """Return the (label, registers) pair for this state."""
        return self.label, dict(self.registers)

    def snapshot(self) -> dict:
        """Create a detached snapshot of current state for tracing.

        Returns:
            Dictionary holding a copy of all state components
        """
        return {
            "label": self.label,
            "registers": dict(self.registers),
            "halted": self.halted,
            "step_count": self.step_count,
        }

    def check(self) -> "MachineState":
        """Raise on the first invalid component, or return self.

        Raises:
            TypeError: If the label, step count, a register index or a
                register value is not an int, or halted is not a bool
            ValueError: If any of those ints is negative
        """
        _check_natural("label", self.label)
        _check_natural("step_count", self.step_count)
        for reg, value in self.registers.items():
            _check_natural("register index", reg)
            _check_natural(f"register R{reg}", value)
        if not isinstance(self.halted, bool):
            raise TypeError(f"halted must be a bool, got {type(self.halted).__name__}")
        return self

    def validate(self) -> bool:
        """Validate state integrity.

        Checks:
            - Label and step count are non-negative ints
            - Register indices and values are non-negative ints

        Returns:
            True if state is valid, False otherwise
        """
        try:
            self.check()
        except (TypeError, ValueError):
            return False
        return True

    def get_register(self, reg: int) -> int:
        """Get value of a register, 0 if it was never written."""
        return self.registers.get(reg, 0)

    def set_register(self, reg: int, value: int) -> "MachineState":
        """Create new state with updated register value.

        Args:
            reg: Register index
            value: New natural value

        Returns:
            New MachineState with updated register

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Register R{reg} cannot hold negative value {value}")

        new_registers = dict(self.registers)
        new_registers[reg] = value

        return MachineState(
            label=self.label,
            registers=new_registers,
            halted=self.halted,
            step_count=self.step_count,
        )

    def set_label(self, new_label: int) -> "MachineState":
        """Create new state with a new label."""
        return MachineState(
            label=new_label,
            registers=dict(self.registers),
            halted=self.halted,
            step_count=self.step_count,
        )

    def set_halted(self, halted: bool = True) -> "MachineState":
        """Create new state with halted flag set."""
        return MachineState(
            label=self.label,
            registers=dict(self.registers),
            halted=halted,
            step_count=self.step_count,
        )

    def increment_step(self) -> "MachineState":
        """Create new state with step count incremented."""
        return MachineState(
            label=self.label,
            registers=dict(self.registers),
            halted=self.halted,
            step_count=self.step_count + 1,
        )

    def dump_registers(self) -> Dict[int, int]:
        """Get a copy of all register values."""
        return dict(self.registers)

    def __str__(self) -> str:
        regs = " ".join(f"R{k}={v}" for k, v in sorted(self.registers.items()))
        return f"[Step {self.step_count}] L{self.label} {regs} {'HALTED' if self.halted else ''}".rstrip()


def create_initial_state(
    registers: Optional[Mapping[int, int]] = None,
    label: int = 0,
) -> MachineState:
    """Create a fresh state ready to run.

    Args:
        registers: Initial register values (copied); absent means 0
        label: Starting label

    Returns:
        MachineState with step count 0 and not halted
    """
    return MachineState(
        label=label,
        registers=dict(registers or {}),
        halted=False,
        step_count=0,
    )
