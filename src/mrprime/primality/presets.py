import mpmath as mpm

from . import errors

DEFAULT_ROUNDS = 3

presets = {
    "quick": {
        "rounds": DEFAULT_ROUNDS,
        "n_jobs": 1,
    },
    "standard": {
        "rounds": 20,
        "n_jobs": 1,
    },
    "keygen": {
        "rounds": 64,
        "n_jobs": 1,
    },
}


def error_probability(rounds: int) -> mpm.mpf:
    """Upper bound 4^-rounds on passing a composite through all rounds.

    Kept as an mpmath float, a python float underflows to 0 past ~537 rounds.
    """
    if rounds < 1:
        raise errors.InvalidInput(name="rounds", value=rounds, reason="at least one round is needed.")
    return mpm.power(mpm.mpf(4), -rounds)


def rounds_for_error(target) -> int:
    # Least k with 4^-k <= target. Pass target as a string to keep its digits,
    # mpm.mpf(1e-30) carries the float's binary expansion.
    mp_target = mpm.mpf(target)
    if not 0 < mp_target < 1:
        raise errors.InvalidInput(name="target", value=target, reason="the error target must be in (0, 1).")

    rounds = int(mpm.ceil(-mpm.log(mp_target, 4)))
    # Guard the rounding at exact powers of 4.
    while error_probability(rounds) > mp_target:
        rounds += 1
    while rounds > 1 and error_probability(rounds - 1) <= mp_target:
        rounds -= 1
    return max(rounds, 1)
