"""Single-provider crypto backed by symmetric block ciphers."""

import codecs
from collections.abc import Iterable
from typing import Any

import structlog

from credcrypt.credentials import Credential, CredentialCache
from credcrypt.credentials.cache import display_name
from credcrypt.exceptions import InvalidArgumentError

from .cipher import SymmetricDecryptor, SymmetricEncryptor

log = structlog.get_logger(__name__)


class SymmetricCrypto:
    """Encrypt and decrypt by credential name using symmetric ciphers.

    Credentials are indexed once at construction. Each ``encrypt`` and
    ``decrypt`` call resolves the credential, creates a cipher handle for it
    and closes that handle before returning, on success and on failure alike.
    Callers who want to run many transforms against the same credential can
    hold a handle from ``get_encryptor``/``get_decryptor`` instead.

    Example:
        >>> crypto = SymmetricCrypto([Credential(key_from_env("APP_KEY"))])
        >>> token = crypto.encrypt("hello")
        >>> crypto.decrypt(token)
        'hello'
    """

    def __init__(self, credentials: Iterable[Credential], encoding: str = "utf-8") -> None:
        """Initialize symmetric crypto.

        Args:
            credentials: Credentials available for encryption and decryption
            encoding: Text encoding for str/bytes conversions

        Raises:
            InvalidArgumentError: If credentials is None or the encoding is unknown
            DuplicateCredentialError: If credential names collide
        """
        if credentials is None:
            raise InvalidArgumentError("credentials cannot be None")

        try:
            self._encoding = codecs.lookup(encoding or "utf-8").name
        except LookupError as e:
            raise InvalidArgumentError(f"Unknown text encoding: {encoding}") from e

        self._credential_cache = CredentialCache(credentials)

    @property
    def credentials(self) -> tuple[Credential, ...]:
        """Named (non-default) credentials."""
        return self._credential_cache.credentials

    @property
    def default_credential(self) -> Credential | None:
        return self._credential_cache.default_credential

    @property
    def encoding(self) -> str:
        return self._encoding

    def encrypt(self, plain: Any, credential_name: str | None = None) -> Any:
        """Encrypt text or bytes.

        Args:
            plain: Plain text or plain bytes
            credential_name: Credential to use, or None for the default credential

        Returns:
            Base64 cipher text for str input, cipher bytes for bytes input

        Raises:
            CredentialNotFoundError: If no credential matches
        """
        with self.get_encryptor(credential_name) as encryptor:
            return encryptor.encrypt(plain)

    def decrypt(self, cipher: Any, credential_name: str | None = None) -> Any:
        """Decrypt text or bytes.

        Args:
            cipher: Base64 cipher text or cipher bytes
            credential_name: Credential to use, or None for the default credential

        Returns:
            Plain text for str input, plain bytes for bytes input

        Raises:
            CredentialNotFoundError: If no credential matches
            EncryptionError: If the cipher value is malformed or the key is wrong
        """
        with self.get_decryptor(credential_name) as decryptor:
            return decryptor.decrypt(cipher)

    def get_encryptor(self, credential_name: str | None = None) -> SymmetricEncryptor:
        """Create an encryptor for the named credential; the caller closes it."""
        credential = self._credential_cache.resolve(credential_name)
        log.debug("encryptor_created", credential=display_name(credential_name))
        return SymmetricEncryptor(credential, self._encoding)

    def get_decryptor(self, credential_name: str | None = None) -> SymmetricDecryptor:
        """Create a decryptor for the named credential; the caller closes it."""
        credential = self._credential_cache.resolve(credential_name)
        log.debug("decryptor_created", credential=display_name(credential_name))
        return SymmetricDecryptor(credential, self._encoding)

    def can_encrypt(self, credential_name: str | None = None) -> bool:
        """Check whether a credential with this name exists."""
        return self._credential_cache.probe(credential_name)

    def can_decrypt(self, credential_name: str | None = None) -> bool:
        """Check whether a credential with this name exists.

        Any credential that can encrypt can also decrypt, so this is the same
        check as ``can_encrypt``.
        """
        return self.can_encrypt(credential_name)

    def __repr__(self) -> str:
        names = [c.name for c in self.credentials]
        return f"SymmetricCrypto(credentials={names!r}, default={self.default_credential is not None})"
