"""
Arbitrary-precision unsigned integers stored as arrays of 32-bit blocks.

A BigNum keeps its magnitude in a numpy uint32 array, least significant block
first. Finished values are immutable: their block array is read-only and every
operation builds a new value. Operations that can fail for a known reason
(division by zero) return a Result; contract violations raise
PreconditionViolation straight away.
"""
import logging
from enum import Enum
from typing import NamedTuple

import numpy as np

from bignum_result import ErrorKind, PreconditionViolation, Result

logger = logging.getLogger(__name__)

BLOCK_BITS = 32
BLOCK_MAX = 0xFFFFFFFF
BLOCK_DTYPE = np.uint32


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


class DivisionResult(NamedTuple):
    quotient: "BigNum"
    remainder: "BigNum"


class BigNum:
    BLOCK_BITS = BLOCK_BITS
    BLOCK_MAX = BLOCK_MAX

    def __init__(self, value=0):
        # value can be a non-negative integer or a sequence of blocks (least
        # significant first)
        if isinstance(value, (bool, np.bool_)):
            raise TypeError("BigNum cannot be built from a bool")
        if isinstance(value, (int, np.integer)):
            value = int(value)
            if value < 0:
                raise ValueError(f"BigNum cannot hold negative value {value}")
            blocks = []
            while True:
                blocks.append(value & BLOCK_MAX)
                value >>= BLOCK_BITS
                if value == 0:
                    break
        elif isinstance(value, (np.ndarray, list, tuple)):
            blocks = [int(block) for block in value]
            if not blocks:
                raise ValueError("BigNum needs at least one block")
            for block in blocks:
                if not 0 <= block <= BLOCK_MAX:
                    raise ValueError(f"Block value {block:#x} does not fit in {BLOCK_BITS} bits")
        else:
            raise TypeError(f"Unsupported type for BigNum initialization: {type(value).__name__}")
        self._blocks = np.array(blocks, dtype=BLOCK_DTYPE)
        self._normalize()

    @classmethod
    def _with_len(cls, length):
        """Zero-filled scratch value of `length` blocks, still writable."""
        n = cls.__new__(cls)
        n._blocks = np.zeros(length, dtype=BLOCK_DTYPE)
        return n

    def _normalize(self):
        # Sealed values are canonical already
        if not self._blocks.flags.writeable:
            return self
        trimmed = np.trim_zeros(self._blocks, "b")
        if trimmed.size == 0:
            trimmed = np.zeros(1, dtype=BLOCK_DTYPE)
        self._blocks = trimmed.copy()
        self._blocks.flags.writeable = False
        return self

    @property
    def blocks(self):
        return self._blocks

    def __len__(self):
        return self._blocks.size

    def block(self, offset):
        """
        Return the block at `offset`, or 0 past the most significant block.
        The number behaves as if padded with infinitely many zero blocks.
        """
        if offset < 0:
            raise PreconditionViolation(f"Negative block offset {offset}")
        if offset < self._blocks.size:
            return int(self._blocks[offset])
        return 0

    def write_block(self, offset, value):
        if not self._blocks.flags.writeable:
            raise PreconditionViolation("Cannot write into a finished BigNum")
        if not 0 <= offset < self._blocks.size:
            raise PreconditionViolation(
                f"Block offset {offset} out of bounds for length {self._blocks.size}"
            )
        if not 0 <= value <= BLOCK_MAX:
            raise PreconditionViolation(f"Block value {value:#x} does not fit in {BLOCK_BITS} bits")
        self._blocks[offset] = value

    def is_zero(self):
        return self._blocks.size == 1 and self._blocks[0] == 0

    def bit_length(self):
        top = int(self._blocks[-1])
        return (self._blocks.size - 1) * BLOCK_BITS + top.bit_length()

    def copy(self):
        n = BigNum._with_len(0)
        n._blocks = self._blocks.copy()
        return n._normalize()

    def __int__(self):
        value = 0
        for block in reversed(self._blocks.tolist()):
            value = (value << BLOCK_BITS) | block
        return value

    def __hash__(self):
        return hash(self._blocks.tobytes())

    def __eq__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return compare(self, other) is Ordering.EQUAL

    def __lt__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __le__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return compare(self, other) is not Ordering.GREATER

    def __gt__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return compare(self, other) is Ordering.GREATER

    def __ge__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return compare(self, other) is not Ordering.LESS

    def __add__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return multiply(self, other)

    def __divmod__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return divide_with_remainder(self, other).unwrap()

    def __floordiv__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return divide(self, other).unwrap()

    def __mod__(self, other):
        if not isinstance(other, BigNum):
            return NotImplemented
        return mod(self, other).unwrap()

    def __pow__(self, exponent, modulus=None):
        # Only modular exponentiation is supported
        if not isinstance(exponent, BigNum) or not isinstance(modulus, BigNum):
            return NotImplemented
        return power_mod(self, exponent, modulus).unwrap()

    def __repr__(self):
        hex_str = "".join(f"{block:08x}" for block in reversed(self._blocks.tolist())).lstrip("0") or "0"
        return f"BigNum(0x{hex_str})"

    def __str__(self):
        return " ".join(f"{block:08x}" for block in reversed(self._blocks.tolist()))


def zero():
    return BigNum(0)


def one():
    return BigNum(1)


def from_word(word):
    if not 0 <= word <= BLOCK_MAX:
        raise PreconditionViolation(f"Word {word:#x} does not fit in {BLOCK_BITS} bits")
    return BigNum(word)


def block_at(n, offset):
    return n.block(offset)


def write_block_at(n, offset, value):
    n.write_block(offset, value)


def normalize(n):
    """Strip most significant zero blocks (keeping at least one) and seal `n`."""
    return n._normalize()


def compare(a, b):
    # In canonical form a longer number is always the larger one
    if len(a) != len(b):
        return Ordering.GREATER if len(a) > len(b) else Ordering.LESS
    for a_block, b_block in zip(reversed(a.blocks.tolist()), reversed(b.blocks.tolist())):
        if a_block > b_block:
            return Ordering.GREATER
        if a_block < b_block:
            return Ordering.LESS
    return Ordering.EQUAL


def less_than(a, b):
    return compare(a, b) is Ordering.LESS


def greater_than(a, b):
    return compare(a, b) is Ordering.GREATER


def equal_to(a, b):
    return compare(a, b) is Ordering.EQUAL


def add(a, b):
    # One extra block for the final carry
    result_len = max(len(a), len(b)) + 1
    result = BigNum._with_len(result_len)
    carry = 0
    for offset in range(result_len):
        total = carry + a.block(offset) + b.block(offset)
        result.write_block(offset, total & BLOCK_MAX)
        carry = 1 if total > BLOCK_MAX else 0
    return normalize(result)


def subtract(a, b):
    """
    Return `a - b` as a new BigNum.

    The unsigned domain has no negative values, so `a < b` is a caller bug and
    raises PreconditionViolation.
    """
    if less_than(a, b):
        raise PreconditionViolation(f"Cannot subtract {b!r} from the smaller {a!r}")

    # a >= b, so the difference fits in len(a) blocks
    result = BigNum._with_len(len(a))
    borrow = 0
    for offset in range(len(a)):
        a_block = a.block(offset)
        b_block = b.block(offset)

        if borrow:
            b_block = (b_block + borrow) & BLOCK_MAX
            # The borrow is absorbed unless adding it wrapped the block to 0
            if b_block:
                borrow = 0

        if a_block >= b_block:
            block_diff = a_block - b_block
        else:
            block_diff = BLOCK_MAX - b_block + 1 + a_block
            borrow = 1
        result.write_block(offset, block_diff)
    return normalize(result)


def _add_block_cascading(n, offset, value):
    """
    Add the double-width `value` into `n` starting at block `offset`.

    The low half goes into the block at `offset`; its overflow plus the high
    half moves on to the next block, and so on until nothing is left over.
    Running past the end of `n` raises PreconditionViolation.
    """
    while value:
        total = n.block(offset) + (value & BLOCK_MAX)
        n.write_block(offset, total & BLOCK_MAX)
        value = (value >> BLOCK_BITS) + (total >> BLOCK_BITS)
        offset += 1


def multiply(a, b):
    # An n-block times an m-block number needs at most n + m blocks
    result = BigNum._with_len(len(a) + len(b))
    b_blocks = b.blocks.tolist()
    for a_offset, a_block in enumerate(a.blocks.tolist()):
        for b_offset, b_block in enumerate(b_blocks):
            _add_block_cascading(result, a_offset + b_offset, a_block * b_block)
    return normalize(result)


def _shift_in_block(n, block):
    # Shift left by one block and put `block` in the freed least significant slot
    shifted = BigNum._with_len(len(n) + 1)
    shifted._blocks[1:] = n.blocks
    shifted.write_block(0, block)
    return normalize(shifted)


def _find_quotient_digit(remainder, divisor):
    """
    Largest single block `q` with `q * divisor <= remainder`.

    Bits are tried from the most significant down, keeping each one unless the
    product overshoots, so this always takes exactly BLOCK_BITS probes.
    """
    digit = 0
    for bit in reversed(range(BLOCK_BITS)):
        candidate = digit | (1 << bit)
        if not greater_than(multiply(BigNum(candidate), divisor), remainder):
            digit = candidate
    return digit


def divide_with_remainder(dividend, divisor):
    """
    Long division, one dividend block at a time, most significant first.

    Returns a Result holding a DivisionResult `(quotient, remainder)` with
    `dividend == quotient * divisor + remainder` and `remainder < divisor`, or
    a DIVISION_BY_ZERO failure.
    """
    if divisor.is_zero():
        logger.debug("Rejecting division of a %d-block number by zero", len(dividend))
        return Result.failure(ErrorKind.DIVISION_BY_ZERO, "division by zero")

    # Dividing by a len-k number removes at least k - 1 blocks; when the
    # dividend is not longer than the divisor the quotient is a single block
    if len(dividend) > len(divisor):
        quotient_len = len(dividend) - len(divisor) + 1
    else:
        quotient_len = 1

    quotient = BigNum._with_len(quotient_len)
    remainder = zero()

    for offset in reversed(range(len(dividend))):
        remainder = _shift_in_block(remainder, dividend.block(offset))
        if less_than(remainder, divisor):
            continue
        digit = _find_quotient_digit(remainder, divisor)
        remainder = subtract(remainder, multiply(BigNum(digit), divisor))
        quotient.write_block(offset, digit)

    return Result.success(DivisionResult(normalize(quotient), normalize(remainder)))


def divide(dividend, divisor):
    result = divide_with_remainder(dividend, divisor)
    if not result.ok:
        return result
    return Result.success(result.value.quotient)


def mod(dividend, divisor):
    result = divide_with_remainder(dividend, divisor)
    if not result.ok:
        return result
    return Result.success(result.value.remainder)


def power_mod(base, exponent, modulus):
    """
    (`base` ^ `exponent`) % `modulus` by square and multiply.

    Exponent bits are walked from the highest set bit down, so the cost
    follows the exponent's bit length. Every intermediate is reduced by
    `modulus`. A zero exponent gives `1 % modulus`, including for a zero base.
    """
    if modulus.is_zero():
        logger.debug("Rejecting modular exponentiation with a zero modulus")
        return Result.failure(ErrorKind.DIVISION_BY_ZERO, "modulus is zero")

    exponent_bits = exponent.bit_length()
    logger.debug(
        "power_mod: %d exponent bits, %d-block modulus", exponent_bits, len(modulus)
    )

    if exponent_bits == 0:
        return mod(one(), modulus)

    # The highest set bit turns the initial one into the base
    result = mod(base, modulus).unwrap()
    base = result
    for bit_offset in reversed(range(exponent_bits - 1)):
        bit = (exponent.block(bit_offset // BLOCK_BITS) >> (bit_offset % BLOCK_BITS)) & 1
        result = mod(multiply(result, result), modulus).unwrap()
        if bit:
            result = mod(multiply(result, base), modulus).unwrap()
    return Result.success(result)
