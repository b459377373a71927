"""Enumerations for credcrypt cipher algorithms."""

from enum import Enum


class SymmetricAlgorithm(str, Enum):
    """Symmetric block ciphers a credential can be bound to.

    All algorithms run in CBC mode with PKCS7 padding. The IV size of a
    credential must match the algorithm's block size.
    """

    AES = "aes"
    TRIPLE_DES = "tripledes"
    CAMELLIA = "camellia"

    def __str__(self) -> str:
        return self.value

    @property
    def block_size(self) -> int:
        """Block size in bytes."""
        return 8 if self is SymmetricAlgorithm.TRIPLE_DES else 16

    @property
    def key_sizes(self) -> frozenset[int]:
        """Accepted key lengths in bytes."""
        if self is SymmetricAlgorithm.TRIPLE_DES:
            return frozenset({16, 24})
        return frozenset({16, 24, 32})
