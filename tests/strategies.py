import hypothesis.strategies as st

# Up to eight blocks keeps the pure Python division loop fast
MAX_VALUE = 2 ** 256


def naturals(max_value=MAX_VALUE):
    return st.integers(min_value=0, max_value=max_value)


def positives(max_value=MAX_VALUE):
    return st.integers(min_value=1, max_value=max_value)
