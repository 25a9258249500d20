"""Gödel numbering of register machine instructions and programs.

Instruction encoding:
    HALT                -> 0
    Ri+ -> Lj           -> <<2i, j>>
    Ri- -> Lj, Lk       -> <<2i + 1, <j, k>>>

The parity of the first pair component tells Increment (even) from
DecrementOrBranch (odd); Halt is the only instruction encoded as 0.

A program maps element-wise to a list of naturals, and that list folds
into one natural with the list numbering from pairing.
"""

from typing import Iterable, List, Sequence

from .instruction import DecrementOrBranch, Halt, Increment, Instruction
from .pairing import (
    check_natural,
    decode_godel_to_list,
    decode_pair1,
    decode_pair2,
    encode_list_to_godel,
    encode_pair1,
    encode_pair2,
)


def encode_instruction(instruction: Instruction) -> int:
    """Encode a single instruction as a natural.

    Args:
        instruction: Increment, DecrementOrBranch or Halt

    Returns:
        Gödel number of the instruction

    Raises:
        TypeError: If instruction is not one of the three cases
    """
    if isinstance(instruction, Halt):
        return 0
    if isinstance(instruction, Increment):
        return encode_pair1(2 * instruction.register, instruction.next_label)
    if isinstance(instruction, DecrementOrBranch):
        return encode_pair1(
            2 * instruction.register + 1,
            encode_pair2(instruction.success_label, instruction.zero_label),
        )
    raise TypeError(f"Not an instruction: {instruction!r}")


def decode_instruction(number: int) -> Instruction:
    """Decode a natural into the instruction it numbers.

    Every natural decodes to exactly one instruction.
    """
    check_natural("number", number)
    if number == 0:
        return Halt()
    x, y = decode_pair1(number)
    register = x // 2
    if x % 2 == 1:
        success_label, zero_label = decode_pair2(y)
        return DecrementOrBranch(register, success_label, zero_label)
    return Increment(register, y)


def encode_program_to_list(program: Iterable[Instruction]) -> List[int]:
    """Encode each instruction, keeping order and length."""
    return [encode_instruction(instruction) for instruction in program]


def decode_list_to_program(numbers: Iterable[int]) -> List[Instruction]:
    """Decode each natural into an instruction, keeping order and length."""
    return [decode_instruction(number) for number in numbers]


def encode_program_to_godel(program: Sequence[Instruction]) -> int:
    """Collapse a whole program into one natural.

    Args:
        program: Sequence of instructions

    Returns:
        encode_list_to_godel(encode_program_to_list(program))
    """
    return encode_list_to_godel(encode_program_to_list(program))


def decode_godel_to_program(godel: int) -> List[Instruction]:
    """Recover the program numbered by godel."""
    return decode_list_to_program(decode_godel_to_list(godel))
