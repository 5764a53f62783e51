from . import errors


def mod_exp(a: int, b: int, n: int) -> int:
    # a^b mod n, square-and-multiply inside pow.
    if n == 0:
        raise errors.DivisionByZero(dividend=a)
    if n < 0:
        raise errors.InvalidInput(name="n", value=n, reason="the modulus must be positive.")
    if b < 0:
        raise errors.InvalidInput(name="b", value=b, reason="the exponent must be non-negative.")
    return pow(a, b, n)
