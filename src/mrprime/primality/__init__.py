from . import errors, presets
from .decompose import Decomposition, decompose
from .generate_primes import find_the_next_prime, random_prime
from .miller_rabin import Verdict, is_probable_prime, primality_test
from .modexp import mod_exp
from .rounds import miller_rabin_round
from .sampler import urandom_number
from .small_primes import PRIME_LIST, SmallPrimeStatus, check_small_primes

__all__ = [
    "errors",
    "presets",
    "Decomposition",
    "decompose",
    "find_the_next_prime",
    "random_prime",
    "Verdict",
    "is_probable_prime",
    "primality_test",
    "mod_exp",
    "miller_rabin_round",
    "urandom_number",
    "PRIME_LIST",
    "SmallPrimeStatus",
    "check_small_primes",
]
