from enum import IntEnum

from . import errors

# Global, read-only small prime list.
PRIME_LIST = (2, 3, 5, 7, 11, 13)


class SmallPrimeStatus(IntEnum):
    DEFINITELY_PRIME = 0
    DEFINITELY_COMPOSITE = 1
    UNKNOWN = 2


def divisibility_test(dividend: int, divisor: int) -> bool:
    if divisor == 0:
        raise errors.DivisionByZero(dividend=dividend)
    return dividend % divisor == 0


def check_small_primes(n: int) -> SmallPrimeStatus:
    """Settle n against PRIME_LIST, if possible.

    DEFINITELY_PRIME when n is one of the listed primes, DEFINITELY_COMPOSITE
    when one of them divides n, UNKNOWN otherwise.
    """
    if n in PRIME_LIST:
        return SmallPrimeStatus.DEFINITELY_PRIME

    for p in PRIME_LIST:
        if divisibility_test(n, p):
            return SmallPrimeStatus.DEFINITELY_COMPOSITE

    return SmallPrimeStatus.UNKNOWN
