import binascii
import os
from typing import Protocol, runtime_checkable

import numpy as np
import torch

from .chacha20 import chacha20, increment_counter

WORD_MASK = 0xFFFFFFFF


@runtime_checkable
class SecureRandomSource(Protocol):
    """Anything that hands out cryptographically secure random bits."""

    def randbits(self, nbits: int) -> int:
        ...

    def spawn(self) -> "SecureRandomSource":
        ...


def generate_initial_words(n_words, part_bytes=4):
    # Draw fresh words from the OS entropy pool.
    hex2int = lambda x: int(binascii.hexlify(x), 16)
    return [hex2int(os.urandom(part_bytes)) for _ in range(n_words)]


def bytes_to_bits(random_bytes: bytes, nbits: int) -> int:
    value = int.from_bytes(random_bytes, "little")
    return value >> (8 * len(random_bytes) - nbits)


class UrandomSource:
    """Secure source reading straight from os.urandom.

    Not reproducible. Every spawned child reads the same pool, which is fine
    since the pool is thread safe and process local.
    """

    def randbits(self, nbits: int) -> int:
        if nbits <= 0:
            return 0
        nbytes = (nbits + 7) // 8
        return bytes_to_bits(os.urandom(nbytes), nbits)

    def spawn(self) -> "UrandomSource":
        return UrandomSource()

    def __repr__(self):
        return "UrandomSource()"


class Csprng:
    def __init__(self, seed=None, nonce=None, num_blocks=64):
        """ChaCha20 key stream generator.

        seed is a 256 bit key given either as 8 32-bit words or as an int, and
        nonce is 64 bits given as 2 words or an int. Missing values are drawn
        from os.urandom. The same (seed, nonce) pair always reproduces the
        same stream.
        """
        self.num_blocks = num_blocks

        # expand 32-byte k.
        # This is 1634760805, 857760878, 2036477234, 1797285236.
        str2ord = lambda s: sum([2 ** (i * 8) * c for i, c in enumerate(s)])
        self.nothing_up_my_sleeve = torch.tensor(
            [
                str2ord(b"expa"),
                str2ord(b"nd 3"),
                str2ord(b"2-by"),
                str2ord(b"te k"),
            ],
            dtype=torch.int64,
        )

        # One block per column.
        self.state = torch.zeros(16, self.num_blocks, dtype=torch.int64)

        # Every column starts at its own counter, and they all advance together.
        self.ind = torch.arange(0, self.num_blocks, dtype=torch.int64)
        self.inc = self.num_blocks

        self.refresh(seed, nonce)

    @staticmethod
    def as_words(value, n_words):
        if value is None:
            return generate_initial_words(n_words)
        if isinstance(value, int):
            return [(value >> (32 * i)) & WORD_MASK for i in range(n_words)]
        words = [int(w) & WORD_MASK for w in value]
        if len(words) != n_words:
            raise ValueError(f"Expected {n_words} words, got {len(words)}.")
        return words

    def refresh(self, seed=None, nonce=None):
        self.seed = self.as_words(seed, 8)
        self.nonce = self.as_words(nonce, 2)

        # Zero out the state.
        self.state.zero_()

        # Set the expand 32-bye k
        self.state[0:4, :] = self.nothing_up_my_sleeve[:, None]

        # Set the seed.
        self.state[4:12, :] = torch.tensor(self.seed, dtype=torch.int64)[:, None]

        # Set the counter.
        self.state[12, :] = self.ind

        # Fill in nonce.
        self.state[14:, :] = torch.tensor(self.nonce, dtype=torch.int64)[:, None]

        self.buffer = b""

    def keystream(self) -> bytes:
        out = chacha20(self.state)
        increment_counter(self.state, self.inc)
        # Serialize block by block, words in little endian.
        words = out.T.contiguous().numpy().astype("<u4")
        return words.tobytes()

    def randbytes(self, nbytes: int) -> bytes:
        while len(self.buffer) < nbytes:
            self.buffer += self.keystream()
        random_bytes, self.buffer = self.buffer[:nbytes], self.buffer[nbytes:]
        return random_bytes

    def randbits(self, nbits: int) -> int:
        if nbits <= 0:
            return 0
        nbytes = (nbits + 7) // 8
        return bytes_to_bits(self.randbytes(nbytes), nbits)

    def spawn(self) -> "Csprng":
        # The child key comes off our own stream, so children are distinct
        # and still reproducible from the parent seed.
        child_seed = np.frombuffer(self.randbytes(32), dtype="<u4").tolist()
        return Csprng(seed=child_seed, nonce=self.nonce, num_blocks=self.num_blocks)

    def __repr__(self):
        return f"Csprng(num_blocks={self.num_blocks})"
