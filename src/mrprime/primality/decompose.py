from typing import NamedTuple

from . import errors


class Decomposition(NamedTuple):
    """
        - n - 1 = 2**s * d
        - s: Integer, the number of times 2 divides n - 1.
        - d: Integer, the odd part of n - 1.
    """
    s: int
    d: int


def decompose(n: int) -> Decomposition:
    if n < 3:
        raise errors.InvalidInput(name="n", value=n, reason="decomposition needs n >= 3.")

    # The odd part of n - 1.
    d = n - 1

    # The number of times two divides n - 1.
    s = 0

    # While d is even divide by 2 to find the odd part.
    while d % 2 == 0:
        d //= 2
        s += 1

    return Decomposition(s=s, d=d)
