"""Register machine evaluator.

Two entry points share the same step primitives:

    evaluate(program, state)  run to completion, no step limit
    RegisterMachine           load / step / run with an optional step
                              budget and execution trace

A run stops when the current instruction is HALT or the label falls
outside the program; both leave the label where it is.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .codec import decode_godel_to_program
from .instruction import Halt, Instruction, is_instruction
from .registry import get_registry
from .state import MachineState, create_initial_state

logger = logging.getLogger(__name__)

HALT_INSTRUCTION = "halt instruction"
HALT_OUT_OF_RANGE = "label out of range"


class StepLimitExceeded(RuntimeError):
    """Raised when a run exhausts its step budget without halting."""

    def __init__(self, limit: int, state: MachineState):
        super().__init__(f"Max steps ({limit}) exceeded at L{state.label}")
        self.limit = limit
        self.state = state


def check_program(program: Iterable[Instruction]) -> List[Instruction]:
    """Copy program into a list, rejecting anything that is not an instruction.

    Raises:
        TypeError: If an element is not an instruction
    """
    program = list(program)
    for index, instruction in enumerate(program):
        if not is_instruction(instruction):
            raise TypeError(f"Not an instruction at L{index}: {instruction!r}")
    return program


def fetch(program: Sequence[Instruction], label: int) -> Optional[Instruction]:
    """Return the instruction at label, or None if label is out of range."""
    if label >= len(program):
        return None
    return program[label]


def evaluate(
    program: Sequence[Instruction],
    state: Union[MachineState, Tuple[int, Mapping[int, int]]],
) -> Union[MachineState, Tuple[int, Dict[int, int]]]:
    """Run a program from a starting state until it halts.

    There is no step limit: a program that never halts makes this call
    never return. Use RegisterMachine(max_steps=...) for a bounded run.

    Args:
        program: Sequence of instructions
        state: Either a MachineState or a (label, registers) pair

    Returns:
        Final state, of the same kind as the state argument

    Raises:
        TypeError: If an element of program is not an instruction, or the
            starting state holds a non-int label or register
        ValueError: If the starting state holds a negative label or register
    """
    program = check_program(program)
    as_pair = not isinstance(state, MachineState)
    current = MachineState.from_pair(state) if as_pair else state.set_halted(False)
    current.check()

    registry = get_registry()
    while not current.halted:
        instruction = fetch(program, current.label)
        if instruction is None:
            current = current.set_halted(True)
        else:
            current = registry.execute(current, instruction)

    return current.as_pair() if as_pair else current


@dataclass
class TraceEntry:
    """Single entry in the execution trace.

    Attributes:
        step: Step count before this entry was executed
        label: Label the instruction was fetched from
        instruction: Instruction executed, None when the label was out of range
        pre_state: State snapshot before execution
        post_state: State snapshot after execution
        halt_reason: Why the machine stopped, if this entry halted it
    """
    step: int
    label: int
    instruction: Optional[Instruction]
    pre_state: dict
    post_state: dict
    halt_reason: Optional[str] = None


class RegisterMachine:
    """Register machine with a step budget and execution trace.

    Attributes:
        registry: StepRegistry with the step primitives
        program: Loaded program
        state: Current machine state
        trace: Recorded trace entries (only filled when tracing is on)
        max_steps: Default step budget for run(), counted since load; None for unbounded
        record_trace: Whether step() appends to trace
    """

    DEFAULT_MAX_STEPS: Optional[int] = None

    def __init__(self, max_steps: Optional[int] = DEFAULT_MAX_STEPS, trace: bool = False):
        """Initialize the machine.

        Args:
            max_steps: Maximum transitions since load before StepLimitExceeded
            trace: Record a TraceEntry for every step
        """
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")
        self.registry = get_registry()
        self.program: List[Instruction] = []
        self.state: Optional[MachineState] = None
        self.trace: List[TraceEntry] = []
        self.max_steps = max_steps
        self.record_trace = trace
        self.halt_reason: Optional[str] = None

    def load_program(
        self,
        program: Sequence[Instruction],
        registers: Optional[Mapping[int, int]] = None,
        label: int = 0,
    ) -> None:
        """Load a program and its starting state.

        Args:
            program: Sequence of instructions
            registers: Initial register values (copied); absent means 0
            label: Starting label

        Raises:
            TypeError: If an element of program is not an instruction, or the
                starting label or a register is not an int
            ValueError: If the starting label or a register is negative
        """
        program = check_program(program)
        state = create_initial_state(registers, label).check()
        self.program = program
        self.state = state
        self.trace = []
        self.halt_reason = None
        logger.debug("Loaded program of %d instructions at L%d", len(self.program), label)

    def load_godel(
        self,
        godel: int,
        registers: Optional[Mapping[int, int]] = None,
        label: int = 0,
    ) -> None:
        """Load the program numbered by godel."""
        self.load_program(decode_godel_to_program(godel), registers, label)

    def _halts_next(self) -> bool:
        instruction = fetch(self.program, self.state.label)
        return instruction is None or isinstance(instruction, Halt)

    def step(self) -> TraceEntry:
        """Execute a single transition.

        Returns:
            TraceEntry describing the transition

        Raises:
            RuntimeError: If no program loaded or machine halted
        """
        if self.state is None:
            raise RuntimeError("No program loaded")

        if self.state.halted:
            raise RuntimeError("Machine is halted")

        pre_state = self.state.snapshot()
        label = self.state.label
        instruction = fetch(self.program, label)

        if instruction is None:
            self.state = self.state.set_halted(True)
            self.halt_reason = HALT_OUT_OF_RANGE
        else:
            self.state = self.registry.execute(self.state, instruction)
            if self.state.halted:
                self.halt_reason = HALT_INSTRUCTION

        entry = TraceEntry(
            step=pre_state["step_count"],
            label=label,
            instruction=instruction,
            pre_state=pre_state,
            post_state=self.state.snapshot(),
            halt_reason=self.halt_reason,
        )
        if self.record_trace:
            self.trace.append(entry)

        if self.state.halted:
            logger.info(
                "Halted (%s) at L%d after %d steps",
                self.halt_reason, self.state.label, self.state.step_count,
            )
        else:
            logger.debug("L%d: %s -> L%d", label, instruction, self.state.label)

        return entry

    def run(self, max_steps: Optional[int] = None) -> MachineState:
        """Run until halt or until the step budget runs out.

        Args:
            max_steps: Override the step budget (instance default if None).
                The budget counts transitions since load_program, not
                since this call.

        Returns:
            Final machine state

        Raises:
            RuntimeError: If no program loaded
            StepLimitExceeded: If the budget is used up before halting
        """
        if self.state is None:
            raise RuntimeError("No program loaded")

        limit = max_steps if max_steps is not None else self.max_steps

        while not self.state.halted:
            if limit is not None and self.state.step_count >= limit and not self._halts_next():
                logger.warning("Step budget of %d exhausted at L%d", limit, self.state.label)
                raise StepLimitExceeded(limit, self.state)
            self.step()

        return self.state

    def get_register(self, reg: int) -> int:
        """Get value of a register.

        Args:
            reg: Register index

        Returns:
            Register value, 0 if never written
        """
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.get_register(reg)

    def dump_registers(self) -> Dict[int, int]:
        """Get all register values.

        Returns:
            Dictionary mapping register indices to values
        """
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.dump_registers()

    def get_label(self) -> int:
        """Get current label.

        Returns:
            Label of the next instruction
        """
        if self.state is None:
            raise RuntimeError("No program loaded")
        return self.state.label

    def get_step_count(self) -> int:
        """Get number of executed transitions since load.

        Returns:
            Step count
        """
        if self.state is None:
            return 0
        return self.state.step_count

    def is_halted(self) -> bool:
        """Check if machine is halted.

        Returns:
            True if halted, or if no program is loaded
        """
        if self.state is None:
            return True
        return self.state.halted

    def get_summary(self) -> Dict:
        """Get execution summary.

        Returns:
            Dictionary with execution statistics and final state
        """
        return {
            "steps": self.get_step_count(),
            "halted": self.is_halted(),
            "halt_reason": self.halt_reason,
            "label": self.state.label if self.state else 0,
            "registers": self.dump_registers() if self.state else {},
            "program_length": len(self.program),
            "trace_length": len(self.trace),
        }
