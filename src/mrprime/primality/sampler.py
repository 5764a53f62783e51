from mrprime.csprng import SecureRandomSource

from . import errors


def urandom_number(lo: int, hi: int, rng: SecureRandomSource) -> int:
    """Draw a uniform integer from the closed range [lo, hi].

    Rejection sampling over range.bit_length() bits, so every value is
    equally likely. Reducing modulo the range would favour the low values.
    """
    if hi < lo:
        raise errors.EmptyWitnessRange(lo=lo, hi=hi)

    span = hi - lo + 1
    nbits = span.bit_length()

    while True:
        candidate = rng.randbits(nbits)
        if candidate < span:
            return candidate + lo
