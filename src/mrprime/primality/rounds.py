from .decompose import Decomposition
from .modexp import mod_exp


def miller_rabin_round(a: int, decomposition: Decomposition, n: int) -> bool:
    """
        One strong probable prime round of n against the witness a.
    @param a: witness in [2, n - 2].
    @param decomposition: (s, d) with n - 1 = 2**s * d.
    @param n: odd candidate.
    @return: True if n passes, False if a witnesses that n is composite.
    """
    s, d = decomposition
    n_minus_one = n - 1

    x = mod_exp(a, d, n)

    # If x is 1 or -1 (mod n), the witness tells us nothing.
    if x == 1 or x == n_minus_one:
        return True

    # Square up to s - 1 times. The s-th square is a^(n-1), which can't tell
    # anything new at this point.
    for _ in range(1, s):
        x = mod_exp(x, 2, n)

        # A non-trivial square root of 1 exists ==> n is composite.
        if x == 1:
            return False

        if x == n_minus_one:
            return True

    # We never hit -1, so a is a compositeness witness.
    return False
