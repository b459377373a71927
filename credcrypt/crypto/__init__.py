"""Crypto providers: single-provider symmetric crypto and composite routing."""

from .base import Crypto, Decryptor, Encryptor
from .cipher import SymmetricDecryptor, SymmetricEncryptor
from .composite import CompositeCrypto
from .symmetric import SymmetricCrypto

__all__ = [
    "Crypto",
    "Decryptor",
    "Encryptor",
    "CompositeCrypto",
    "SymmetricCrypto",
    "SymmetricDecryptor",
    "SymmetricEncryptor",
]
