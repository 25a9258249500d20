"""regmachine: register machines and their Gödel numbering.

This package models a Minsky-style counter machine with three
instructions (increment, decrement-or-branch, halt) and a bijection
between its programs and the natural numbers, so a whole program can be
carried as a single integer.

Architecture:
    PROGRAM <-> LIST OF NATURALS <-> NATURAL        (codec, pairing)
    PROGRAM + STATE -> FETCH -> REGISTRY -> STATE   (machine)

Modules:
    pairing: Pairing functions and list Gödel numbering
    instruction: Increment, DecrementOrBranch and Halt
    codec: Instruction and program Gödel numbering
    state: MachineState with sparse, zero-default registers
    registry: Step primitives for each instruction kind
    machine: evaluate() and the RegisterMachine orchestrator
"""

__version__ = "0.1.0"
__author__ = "regmachine developers"

from .pairing import (
    trailing_zeros,
    encode_pair1,
    encode_pair2,
    decode_pair1,
    decode_pair2,
    encode_list_to_godel,
    decode_godel_to_list,
)
from .instruction import Increment, DecrementOrBranch, Halt, Instruction
from .codec import (
    encode_instruction,
    decode_instruction,
    encode_program_to_list,
    decode_list_to_program,
    encode_program_to_godel,
    decode_godel_to_program,
)
from .state import MachineState, create_initial_state
from .registry import StepRegistry, get_registry
from .machine import RegisterMachine, StepLimitExceeded, TraceEntry, evaluate

__all__ = [
    "trailing_zeros",
    "encode_pair1",
    "encode_pair2",
    "decode_pair1",
    "decode_pair2",
    "encode_list_to_godel",
    "decode_godel_to_list",
    "Increment",
    "DecrementOrBranch",
    "Halt",
    "Instruction",
    "encode_instruction",
    "decode_instruction",
    "encode_program_to_list",
    "decode_list_to_program",
    "encode_program_to_godel",
    "decode_godel_to_program",
    "MachineState",
    "create_initial_state",
    "StepRegistry",
    "get_registry",
    "RegisterMachine",
    "StepLimitExceeded",
    "TraceEntry",
    "evaluate",
]
