"""Credential values and name-indexed credential lookup."""

from credcrypt.exceptions import (
    CredentialError,
    CredentialNotFoundError,
    DuplicateCredentialError,
)

from .cache import DEFAULT, CredentialCache
from .credential import Credential, KeyFactory
from .keys import (
    key_factory_from_reference,
    key_from_base64,
    key_from_bytes,
    key_from_env,
    key_from_file,
)

__all__ = [
    "DEFAULT",
    "Credential",
    "CredentialCache",
    "KeyFactory",
    "key_factory_from_reference",
    "key_from_base64",
    "key_from_bytes",
    "key_from_env",
    "key_from_file",
    # Exceptions
    "CredentialError",
    "CredentialNotFoundError",
    "DuplicateCredentialError",
]
