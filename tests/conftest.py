import pytest
from hypothesis import settings

from bignum import BigNum
from hexcodec import from_hex_string

# Pure Python long division is slow enough to trip the default deadline
settings.register_profile("bignum", deadline=None)
settings.load_profile("bignum")


@pytest.fixture
def bn_max_block():
    return BigNum(0xFFFFFFFF)


@pytest.fixture
def hex_bn():
    """Parse a hex literal, failing the test on invalid input."""
    def parse(text):
        return from_hex_string(text).unwrap()
    return parse
