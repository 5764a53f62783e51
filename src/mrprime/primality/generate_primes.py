from loguru import logger

from mrprime.csprng import SecureRandomSource, UrandomSource

from . import errors
from .miller_rabin import is_probable_prime
from .presets import presets

KEYGEN_ROUNDS = presets["keygen"]["rounds"]


def find_the_next_prime(
        start: int,
        up: bool = True,
        rounds: int = KEYGEN_ROUNDS,
        rng: SecureRandomSource = None,
) -> int:
    """Nearest probable prime at or above start, or at or below it when up is False."""
    if rng is None:
        rng = UrandomSource()

    if up and start <= 2:
        return 2
    if not up and start < 2:
        raise errors.NotFoundPrime(start=start)
    if not up and start < 3:
        return 2

    step: int = 2 if up else -2
    # Only odd queries from here on.
    current_query: int = start if start % 2 == 1 else start + step // 2
    while True:
        if current_query < 3:
            return 2
        if is_probable_prime(current_query, rounds, rng=rng):
            break
        current_query += step
    return current_query


def random_prime(
        bits: int,
        rounds: int = KEYGEN_ROUNDS,
        rng: SecureRandomSource = None,
) -> int:
    """Random probable prime of exactly `bits` bits."""
    if bits < 2:
        raise errors.InvalidInput(name="bits", value=bits, reason="a prime needs at least 2 bits.")
    if rng is None:
        rng = UrandomSource()

    tries = 0
    while True:
        tries += 1
        candidate: int = rng.randbits(bits)
        # Set the top bit for full length and the bottom bit for oddness.
        candidate |= (1 << (bits - 1)) | 1
        if is_probable_prime(candidate, rounds, rng=rng):
            logger.debug(f"Found a {bits} bit prime after {tries} candidates.")
            return candidate
