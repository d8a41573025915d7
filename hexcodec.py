"""
Hex text boundary of the big number engine.

Text is big-endian (most significant digit first). Spaces may appear anywhere
and are ignored, so "1 FFFFFFFE" and "1FFFFFFFE" parse to the same number.
"""
import logging

from bignum import BLOCK_BITS, BigNum
from bignum_result import ErrorKind, Result

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
SEPARATOR = " "
DIGITS_PER_BLOCK = BLOCK_BITS // 4


def from_hex_string(text):
    """
    Parse hex `text` into a BigNum.

    :param text: hex digits in either case, spaces ignored.
    :return: Result holding the BigNum, or an INVALID_INPUT failure for a
             non-string, an empty/all-space string or any other character.
    """
    if not isinstance(text, str):
        return Result.failure(ErrorKind.INVALID_INPUT, f"expected str, got {type(text).__name__}")

    for pos, char in enumerate(text):
        if char not in HEX_DIGITS and char != SEPARATOR:
            logger.warning("Invalid hex char %r at pos %d", char, pos)
            return Result.failure(ErrorKind.INVALID_INPUT, f"invalid hex char {char!r} at pos {pos}")

    digits = text.replace(SEPARATOR, "")
    if not digits:
        return Result.failure(ErrorKind.INVALID_INPUT, "no hex digits")

    # Cut blocks from the least significant end
    blocks = []
    for end in range(len(digits), 0, -DIGITS_PER_BLOCK):
        start = max(end - DIGITS_PER_BLOCK, 0)
        blocks.append(int(digits[start:end], 16))
    return Result.success(BigNum(blocks))


def to_hex_string(n):
    """Space separated 8-digit groups, most significant block first."""
    return str(n)
