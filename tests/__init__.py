"""
Test suite for the BigNum engine.

- test_representation.py : construction, block access, canonical form
- test_arithmetic.py     : comparison, addition, subtraction, multiplication
- test_division.py       : division with remainder and modular exponentiation
- test_hexcodec.py       : hex parsing and rendering
- test_main.py           : demo front-end
"""
