import torch


@torch.jit.script
def rotl(x: torch.Tensor, s: int) -> None:
    """
    x's dtype must be torch.int64.
    We are kind of forced to do this because
    1. pytorch doesn't support uint32, and
    2. >> doesn't move the sign bit.
    """
    mask = 0xFFFFFFFF
    down = x >> (32 - s)
    x.__ilshift__(s).bitwise_or_(down).bitwise_and_(mask)


@torch.jit.script
def QR(x: torch.Tensor, a: int, b: int, c: int, d: int) -> None:
    """
    The CHACHA quarter round.
    """
    mask = 0xFFFFFFFF

    x[a].add_(x[b])
    x[a].bitwise_and_(mask)
    x[d].bitwise_xor_(x[a])
    rotl(x[d], 16)

    x[c].add_(x[d])
    x[c].bitwise_and_(mask)
    x[b].bitwise_xor_(x[c])
    rotl(x[b], 12)

    x[a].add_(x[b])
    x[a].bitwise_and_(mask)
    x[d].bitwise_xor_(x[a])
    rotl(x[d], 8)

    x[c].add_(x[d])
    x[c].bitwise_and_(mask)
    x[b].bitwise_xor_(x[c])
    rotl(x[b], 7)


@torch.jit.script
def double_round(x: torch.Tensor) -> None:
    # Column round.
    QR(x, 0, 4, 8, 12)
    QR(x, 1, 5, 9, 13)
    QR(x, 2, 6, 10, 14)
    QR(x, 3, 7, 11, 15)
    # Diagonal round.
    QR(x, 0, 5, 10, 15)
    QR(x, 1, 6, 11, 12)
    QR(x, 2, 7, 8, 13)
    QR(x, 3, 4, 9, 14)


@torch.jit.script
def increment_counter(state: torch.Tensor, inc: int) -> None:
    # Words 12 and 13 hold the 64 bit block counter.
    state[12] += inc
    state[13] += state[12] >> 32
    state[12] = state[12] & 0xFFFFFFFF
    state[13] = state[13] & 0xFFFFFFFF


@torch.jit.script
def chacha20(state: torch.Tensor) -> torch.Tensor:
    """
    state is a 16 x B int64 tensor, one ChaCha20 block per column.
    """
    x = state.clone()

    for _ in range(10):
        double_round(x)

    # Return the key stream words.
    return (x + state) & 0xFFFFFFFF
