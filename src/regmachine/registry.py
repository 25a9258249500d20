"""StepRegistry: step primitives for the register machine.

Each instruction kind maps to one primitive, a pure function
(MachineState, instruction) -> MachineState. The registry is frozen
after initialization.

Primitives:
    Increment:          Ri+ -> Lj
    DecrementOrBranch:  Ri- -> Lj, Lk
    Halt:               stop, label unchanged
"""

from typing import Callable, Dict, Optional, Type

from .instruction import DecrementOrBranch, Halt, Increment, Instruction
from .state import MachineState

StepHandler = Callable[[MachineState, Instruction], MachineState]


class StepRegistry:
    """Frozen registry of register machine step primitives.

    Attributes:
        _primitives: Dictionary mapping instruction classes to handlers
        _frozen: Whether the registry is locked against modifications
    """

    def __init__(self):
        self._primitives: Dict[Type, StepHandler] = {}
        self._frozen = False
        self._register_all_primitives()
        self.freeze()

    def _register_all_primitives(self) -> None:
        self.register(Increment, self._op_increment)
        self.register(DecrementOrBranch, self._op_decrement_or_branch)
        self.register(Halt, self._op_halt)

    def register(self, kind: Type, handler: StepHandler) -> None:
        """Register a step primitive.

        Args:
            kind: Instruction class the handler applies to
            handler: Function that takes (state, instruction) and returns new state

        Raises:
            RuntimeError: If registry is frozen
            ValueError: If kind already registered
        """
        if self._frozen:
            raise RuntimeError("Cannot register primitives: registry is frozen")
        if kind in self._primitives:
            raise ValueError(f"Primitive already registered: {kind.__name__}")
        self._primitives[kind] = handler

    def freeze(self) -> None:
        """Freeze the registry to prevent further modifications."""
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def get_kinds(self) -> set:
        """Get set of all instruction classes with a primitive."""
        return set(self._primitives.keys())

    def execute(self, state: MachineState, instruction: Instruction) -> MachineState:
        """Execute one instruction.

        Halt does not count as a step; every other primitive bumps the
        step count.

        Raises:
            KeyError: If the instruction kind has no primitive
        """
        kind = type(instruction)
        if kind not in self._primitives:
            raise KeyError(f"Unknown instruction kind: {kind.__name__}")

        new_state = self._primitives[kind](state, instruction)
        if new_state.halted:
            return new_state
        return new_state.increment_step()

    # =========================================================================
    # Primitives
    # =========================================================================

    def _op_increment(self, state: MachineState, instruction: Increment) -> MachineState:
        value = state.get_register(instruction.register)
        new_state = state.set_register(instruction.register, value + 1)
        return new_state.set_label(instruction.next_label)

    def _op_decrement_or_branch(
        self, state: MachineState, instruction: DecrementOrBranch
    ) -> MachineState:
        # A zero register is left alone; no entry is created for it.
        value = state.get_register(instruction.register)
        if value > 0:
            new_state = state.set_register(instruction.register, value - 1)
            return new_state.set_label(instruction.success_label)
        return state.set_label(instruction.zero_label)

    def _op_halt(self, state: MachineState, instruction: Halt) -> MachineState:
        return state.set_halted(True)


# Singleton registry instance
_registry: Optional[StepRegistry] = None


def get_registry() -> StepRegistry:
    """Get the singleton step registry instance."""
    global _registry
    if _registry is None:
        _registry = StepRegistry()
    return _registry
