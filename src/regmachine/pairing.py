"""Pairing functions and list Gödel numbering.

Two pairing functions map N x N onto the naturals:

    <<x, y>> = 2^x * (2y + 1)        (onto the positive naturals)
    <x, y>   = 2^x * (2y + 1) - 1    (onto all naturals)

Lists are folded from the right with <<x, y>>, so the empty list is 0
and every non-empty list is positive:

    [] -> 0
    [h, *t] -> <<h, encode(t)>>

All values are Python ints, so magnitudes are bounded only by memory.
"""

from typing import Iterable, List, Tuple


def check_natural(name: str, value: int) -> int:
    """Validate that value is a non-negative int.

    Raises:
        TypeError: If value is not an int (bool is rejected too)
        ValueError: If value is negative
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be a natural number, got {value}")
    return value


def trailing_zeros(b: int) -> int:
    """Return the 2-adic valuation of b (its count of trailing zero bits).

    b ^ (b - 1) sets every bit up to and including the lowest set bit of b;
    shifting that right once leaves exactly one set bit per trailing zero.

    Args:
        b: Positive integer

    Returns:
        Number of trailing zero bits of b

    Raises:
        ValueError: If b is 0, which has no finite valuation
    """
    check_natural("b", b)
    if b == 0:
        raise ValueError("trailing_zeros is undefined for 0")
    return ((b ^ (b - 1)) >> 1).bit_length()


def encode_pair1(x: int, y: int) -> int:
    """<<x, y>> = 2^x * (2y + 1). Always positive."""
    check_natural("x", x)
    check_natural("y", y)
    return (2 * y + 1) << x


def encode_pair2(x: int, y: int) -> int:
    """<x, y> = 2^x * (2y + 1) - 1."""
    return encode_pair1(x, y) - 1


def decode_pair1(a: int) -> Tuple[int, int]:
    """Invert encode_pair1.

    Args:
        a: Positive integer

    Returns:
        (x, y) with encode_pair1(x, y) == a

    Raises:
        ValueError: If a is 0 (not in the image of encode_pair1)
    """
    check_natural("a", a)
    if a == 0:
        raise ValueError("decode_pair1 requires a positive integer, got 0")
    x = trailing_zeros(a)
    y = ((a >> x) - 1) // 2
    return x, y


def decode_pair2(a: int) -> Tuple[int, int]:
    """Invert encode_pair2."""
    check_natural("a", a)
    return decode_pair1(a + 1)


def encode_list_to_godel(values: Iterable[int]) -> int:
    """Fold a finite sequence of naturals into a single natural.

    Args:
        values: Sequence of naturals (any iterable is accepted)

    Returns:
        Gödel number of the list; 0 for the empty list
    """
    items = list(values)
    godel = 0
    for index in range(len(items) - 1, -1, -1):
        godel = encode_pair1(items[index], godel)
    return godel


def decode_godel_to_list(godel: int) -> List[int]:
    """Unfold a Gödel number back into its list of naturals.

    Args:
        godel: Natural produced by encode_list_to_godel (every natural is)

    Returns:
        List of naturals; empty for 0
    """
    check_natural("godel", godel)
    values: List[int] = []
    rest = godel
    while rest != 0:
        head, rest = decode_pair1(rest)
        values.append(head)
    return values
