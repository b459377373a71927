"""Lazy key factories for credentials.

Supports three key reference formats:
1. ${VAR_NAME} - Base64 key read from an environment variable
2. @file:path - Raw key bytes read from a file
3. base64:data - Literal base64 key (not recommended outside tests)

Nothing is read until the credential first needs its key.
"""

import base64
import binascii
import os
import re
from pathlib import Path

import structlog

from credcrypt.exceptions import ConfigurationError, CredentialNotFoundError, InvalidArgumentError

from .credential import KeyFactory

log = structlog.get_logger(__name__)

ENV_PATTERN = re.compile(r"^\$\{([A-Z_][A-Z0-9_]*)\}$")
FILE_PATTERN = re.compile(r"^@file:(.+)$")
BASE64_PATTERN = re.compile(r"^base64:(.+)$")


def _decode_base64(value: str, source: str) -> bytes:
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Key from {source} is not valid base64") from e


def key_from_bytes(data: bytes) -> KeyFactory:
    """Return a factory for a fixed key."""
    key = bytes(data)
    return lambda: key


def key_from_base64(value: str) -> KeyFactory:
    """Return a factory decoding a base64 key on first use."""
    return lambda: _decode_base64(value, "base64 literal")


def key_from_env(var_name: str) -> KeyFactory:
    """Return a factory reading a base64 key from an environment variable.

    Raises (when invoked):
        CredentialNotFoundError: If the variable is not set
    """

    def factory() -> bytes:
        value = os.getenv(var_name)
        if value is None:
            raise CredentialNotFoundError(
                f"Environment variable not set: {var_name}",
                suggestion=f"Set the environment variable:\n  export {var_name}='<base64 key>'",
            )
        log.debug("key_loaded_from_environment", variable=var_name)
        return _decode_base64(value, f"${{{var_name}}}")

    return factory


def key_from_file(path: str | Path) -> KeyFactory:
    """Return a factory reading raw key bytes from a file.

    Raises (when invoked):
        CredentialNotFoundError: If the file does not exist
    """
    key_file = Path(path)

    def factory() -> bytes:
        if not key_file.is_file():
            raise CredentialNotFoundError(f"Key file not found: {key_file}")
        log.debug("key_loaded_from_file", path=str(key_file))
        return key_file.read_bytes()

    return factory


def key_factory_from_reference(reference: str) -> KeyFactory:
    """Parse a key reference into a lazy key factory.

    Args:
        reference: Key reference (``${VAR}``, ``@file:path`` or ``base64:data``)

    Returns:
        Key factory

    Raises:
        ConfigurationError: If the reference format is not recognized
    """
    if match := ENV_PATTERN.match(reference):
        return key_from_env(match.group(1))
    if match := FILE_PATTERN.match(reference):
        return key_from_file(match.group(1))
    if match := BASE64_PATTERN.match(reference):
        return key_from_base64(match.group(1))

    raise ConfigurationError(
        "Unrecognized key reference; expected ${VAR_NAME}, @file:<path> or base64:<data>"
    )
