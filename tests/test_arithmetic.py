"""
Comparison, addition, subtraction and multiplication.

Concrete cases use hex literals (big-endian, spaces ignored); the property
tests use Python's int as the reference.
"""
import pytest
from hypothesis import assume, given

from bignum import (
    BigNum,
    Ordering,
    add,
    compare,
    equal_to,
    greater_than,
    less_than,
    multiply,
    one,
    subtract,
    zero,
)
from bignum_result import PreconditionViolation
from tests.strategies import naturals


class TestCompare:
    def test_longer_number_is_greater(self, hex_bn):
        assert compare(hex_bn("1 00000000"), hex_bn("FFFFFFFF")) is Ordering.GREATER
        assert compare(hex_bn("FFFFFFFF"), hex_bn("1 00000000")) is Ordering.LESS

    def test_same_length_decided_by_most_significant_difference(self, hex_bn):
        assert compare(hex_bn("2 00000000"), hex_bn("1 FFFFFFFF")) is Ordering.GREATER
        assert compare(hex_bn("1 00000001"), hex_bn("1 00000002")) is Ordering.LESS

    def test_equal(self, hex_bn):
        assert compare(hex_bn("ABC DEF01234"), hex_bn("abcdef01234")) is Ordering.EQUAL

    def test_predicates(self):
        assert less_than(one(), BigNum(2))
        assert greater_than(BigNum(2), one())
        assert equal_to(zero(), BigNum(0))
        assert not less_than(one(), one())
        assert not greater_than(one(), one())

    def test_operators(self):
        assert BigNum(1) < BigNum(2) <= BigNum(2) < BigNum(1 << 40)
        assert BigNum(1 << 40) > BigNum(3) >= BigNum(3)
        assert BigNum(5) != BigNum(6)

    def test_comparison_with_int_is_not_supported(self):
        assert (BigNum(1) == 1) is False
        with pytest.raises(TypeError):
            BigNum(1) < 2

    @given(a=naturals(), b=naturals())
    def test_matches_int_ordering(self, a, b):
        expected = Ordering.LESS if a < b else Ordering.GREATER if a > b else Ordering.EQUAL
        assert compare(BigNum(a), BigNum(b)) is expected


class TestAdd:
    def test_carry_expands_length(self, hex_bn, bn_max_block):
        assert add(bn_max_block, bn_max_block) == hex_bn("1 FFFFFFFE")

    def test_adding_zero_does_not_affect_first_operand(self, hex_bn):
        n1 = hex_bn("FFFFFFFF")
        assert add(n1, BigNum(0)) == n1

    def test_operands_of_different_length(self, hex_bn):
        n1 = hex_bn("000AA213 F32785D1 FE1190ABB")
        n2 = hex_bn("EBA11829 27F45C1B")
        expected = hex_bn("00AA2140 1E197549 090D66D6")
        assert add(n1, n2) == expected
        assert add(n2, n1) == expected

    def test_carry_ripples_through_every_block(self):
        n = BigNum((1 << 128) - 1)
        assert add(n, one()).blocks.tolist() == [0, 0, 0, 0, 1]

    def test_result_is_canonical(self):
        assert len(add(one(), one())) == 1

    def test_operator(self):
        assert BigNum(2) + BigNum(3) == BigNum(5)

    @given(a=naturals(), b=naturals())
    def test_commutative_and_matches_int(self, a, b):
        result = add(BigNum(a), BigNum(b))
        assert result == add(BigNum(b), BigNum(a))
        assert int(result) == a + b

    @given(a=naturals())
    def test_zero_identity(self, a):
        assert add(BigNum(a), zero()) == BigNum(a)


class TestSubtract:
    def test_borrow_across_block(self, hex_bn):
        assert subtract(hex_bn("1 00000000"), hex_bn("FFFFFFFF")) == one()

    def test_borrow_through_all_ones_block(self):
        # Adding the borrow to 0xFFFFFFFF wraps, so the borrow must persist
        a = BigNum([0, 0, 1])
        b = BigNum([1, 0xFFFFFFFF])
        assert int(subtract(a, b)) == (1 << 64) - (0xFFFFFFFF << 32) - 1

    def test_result_is_canonical(self, hex_bn):
        assert len(subtract(hex_bn("5 00000000"), hex_bn("4 FFFFFFFF"))) == 1

    def test_underflow_is_a_precondition_violation(self, hex_bn):
        with pytest.raises(PreconditionViolation):
            subtract(hex_bn("FFFFFFFF"), hex_bn("1 00000000"))
        with pytest.raises(PreconditionViolation):
            BigNum(1) - BigNum(2)

    def test_operator(self):
        assert BigNum(10) - BigNum(3) == BigNum(7)

    @given(a=naturals())
    def test_self_and_zero(self, a):
        n = BigNum(a)
        assert subtract(n, n) == zero()
        assert subtract(n, zero()) == n

    @given(a=naturals(), b=naturals())
    def test_inverse_of_add(self, a, b):
        assume(a >= b)
        difference = subtract(BigNum(a), BigNum(b))
        assert int(difference) == a - b
        assert add(difference, BigNum(b)) == BigNum(a)


class TestMultiply:
    def test_one_is_identity(self, hex_bn):
        n = hex_bn("EBA11829 27F45C1B")
        assert multiply(n, one()) == hex_bn("EBA11829 27F45C1B")

    def test_zero_annihilates(self, hex_bn):
        product = multiply(hex_bn("EBA11829 27F45C1B"), zero())
        assert product == zero()
        assert len(product) == 1

    def test_full_blocks(self, bn_max_block):
        assert int(multiply(bn_max_block, bn_max_block)) == 0xFFFFFFFF * 0xFFFFFFFF

    def test_cascading_carry(self):
        # Every partial product overflows into the next block
        n = BigNum((1 << 192) - 1)
        assert int(multiply(n, n)) == ((1 << 192) - 1) ** 2

    def test_operator(self):
        assert BigNum(6) * BigNum(7) == BigNum(42)

    @given(a=naturals(), b=naturals())
    def test_commutative_and_matches_int(self, a, b):
        product = multiply(BigNum(a), BigNum(b))
        assert product == multiply(BigNum(b), BigNum(a))
        assert int(product) == a * b

    @given(a=naturals())
    def test_identities(self, a):
        assert multiply(BigNum(a), zero()) == zero()
        assert multiply(BigNum(a), one()) == BigNum(a)
