"""credcrypt: credential-routed symmetric encryption."""

from credcrypt.credentials import Credential, CredentialCache
from credcrypt.crypto import (
    CompositeCrypto,
    Crypto,
    Decryptor,
    Encryptor,
    SymmetricCrypto,
)
from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import (
    ConfigurationError,
    CredcryptError,
    CredentialError,
    CredentialNotFoundError,
    DuplicateCredentialError,
    EncryptionError,
    InvalidArgumentError,
    ProviderNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "Credential",
    "CredentialCache",
    "CompositeCrypto",
    "Crypto",
    "Decryptor",
    "Encryptor",
    "SymmetricAlgorithm",
    "SymmetricCrypto",
    # Exceptions
    "ConfigurationError",
    "CredcryptError",
    "CredentialError",
    "CredentialNotFoundError",
    "DuplicateCredentialError",
    "EncryptionError",
    "InvalidArgumentError",
    "ProviderNotFoundError",
]
