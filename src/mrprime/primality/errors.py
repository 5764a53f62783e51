from functools import wraps

from loguru import logger

# Above this many bits an int is shown by its size. str() of an int past
# 4300 decimal digits raises ValueError.
LABEL_MAX_BITS = 256


def int_label(value) -> str:
    if isinstance(value, int) and value.bit_length() > LABEL_MAX_BITS:
        sign = "-" if value < 0 else ""
        return f"<{sign}{value.bit_length()} bit integer>"
    return repr(value)


def log_error(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[Error] Error in {func.__name__} : {e}")
            raise

    return wrapper


class InvalidInput(Exception):
    def __init__(self, name, value, reason):
        self.name = name
        self.value = value
        self.message_error = f"""Invalid {name} = {int_label(value)}: {reason}"""
        super().__init__(self.message_error)

    def __repr__(self):
        return repr(self.message_error)

    def __str__(self):
        return self.message_error


class DivisionByZero(Exception):
    def __init__(self, dividend):
        self.message_error = f"""Can't divide {int_label(dividend)} by zero.
This is a wiring defect, the divisors are fixed and non-zero."""
        super().__init__(self.message_error)

    def __repr__(self):
        return repr(self.message_error)

    def __str__(self):
        return self.message_error


class EmptyWitnessRange(Exception):
    def __init__(self, lo, hi):
        self.message_error = f"""The witness range is empty: lo = {int_label(lo)}, hi = {int_label(hi)}."""
        super().__init__(self.message_error)

    def __repr__(self):
        return repr(self.message_error)

    def __str__(self):
        return self.message_error


class NotFoundPrime(Exception):
    def __init__(self, start):
        self.message_error = f"""There is no prime at or below start = {int_label(start)}."""
        super().__init__(self.message_error)

    def __repr__(self):
        return repr(self.message_error)

    def __str__(self):
        return self.message_error
