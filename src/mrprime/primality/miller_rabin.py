import operator
from enum import IntEnum

from joblib import Parallel, delayed
from loguru import logger

from mrprime.csprng import SecureRandomSource, UrandomSource

from . import errors
from .decompose import Decomposition, decompose
from .presets import DEFAULT_ROUNDS
from .rounds import miller_rabin_round
from .sampler import urandom_number
from .small_primes import SmallPrimeStatus, check_small_primes


class Verdict(IntEnum):
    """Outcome of a test. The values double as the CLI exit codes."""
    PROBABLY_PRIME = 0
    COMPOSITE = 1
    INVALID_INPUT = 2


def as_integer(name, value) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise errors.InvalidInput(name=name, value=value, reason="an integer is required.") from None


def sample_and_test(n: int, decomposition: Decomposition, rng: SecureRandomSource) -> bool:
    # Witness a in [2, n - 2].
    a = urandom_number(2, n - 2, rng)
    passed = miller_rabin_round(a, decomposition, n)
    if not passed:
        logger.debug(f"Witness {errors.int_label(a)} proves {errors.int_label(n)} composite.")
    return passed


@errors.log_error
def primality_test(
    n,
    k=DEFAULT_ROUNDS,
    rng: SecureRandomSource = None,
    n_jobs: int = 1,
    parallel_backend: str = None,
) -> Verdict:
    """Miller-Rabin probabilistic primality test.

    Args:
        n (int): The candidate.
        k (int, optional): Number of independent rounds. A composite passes with
            probability at most 4^-k. Defaults to 3.
        rng (SecureRandomSource, optional): Source of the witnesses. Defaults to
            a fresh UrandomSource. Pass a seeded Csprng for reproducible runs.
        n_jobs (int, optional): joblib workers. With anything other than 1, all k
            rounds run, each on its own spawned stream. Defaults to 1.
        parallel_backend (str, optional): joblib backend for n_jobs != 1.

    Returns:
        Verdict: PROBABLY_PRIME or COMPOSITE.
    """
    n = as_integer("n", n)
    k = as_integer("k", k)
    if k < 1:
        raise errors.InvalidInput(name="k", value=k, reason="the number of rounds must be positive.")

    # Base cases.
    if n < 2:
        return Verdict.COMPOSITE
    if n == 2:
        return Verdict.PROBABLY_PRIME
    if n % 2 == 0:
        return Verdict.COMPOSITE

    # Quick check against the small primes.
    small_prime_status = check_small_primes(n)
    if small_prime_status == SmallPrimeStatus.DEFINITELY_PRIME:
        return Verdict.PROBABLY_PRIME
    elif small_prime_status == SmallPrimeStatus.DEFINITELY_COMPOSITE:
        return Verdict.COMPOSITE

    decomposition = decompose(n)
    logger.debug(
        f"{n.bit_length()} bit candidate: n - 1 = 2^{decomposition.s} * d, "
        f"d has {decomposition.d.bit_length()} bits"
    )

    if rng is None:
        rng = UrandomSource()

    if n_jobs == 1:
        for _ in range(k):
            if not sample_and_test(n, decomposition, rng):
                return Verdict.COMPOSITE
        return Verdict.PROBABLY_PRIME

    # Every round gets its own stream. All the rounds run, and one failure
    # is as conclusive as it is in the sequential loop.
    streams = [rng.spawn() for _ in range(k)]
    passed = Parallel(n_jobs=n_jobs, backend=parallel_backend)(
        delayed(sample_and_test)(n, decomposition, stream) for stream in streams
    )
    return Verdict.PROBABLY_PRIME if all(passed) else Verdict.COMPOSITE


def is_probable_prime(n, k=DEFAULT_ROUNDS, **kw) -> bool:
    return primality_test(n, k, **kw) == Verdict.PROBABLY_PRIME
