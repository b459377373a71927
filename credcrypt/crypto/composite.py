"""Route crypto requests across several providers by credential name."""

from collections.abc import Iterable
from typing import Any

import structlog

from credcrypt.credentials.cache import display_name
from credcrypt.exceptions import InvalidArgumentError, ProviderNotFoundError

from .base import Crypto, Decryptor, Encryptor

log = structlog.get_logger(__name__)


class CompositeCrypto:
    """Aggregate crypto providers behind a single Crypto interface.

    Every request goes to the first registered provider that reports it can
    handle the credential name for that direction. Encrypt and decrypt are
    checked independently: a provider that can encrypt with a name but not
    decrypt with it is skipped for decrypt calls. When two providers claim
    the same name, the one registered first always wins.

    Example:
        >>> crypto = CompositeCrypto([aes_crypto, legacy_crypto])
        >>> crypto.can_encrypt("payments")
        True
        >>> token = crypto.encrypt("hello", "payments")
    """

    def __init__(self, cryptos: Iterable[Crypto]) -> None:
        """Initialize composite crypto.

        Args:
            cryptos: Providers in priority order; may be empty

        Raises:
            InvalidArgumentError: If cryptos is None
        """
        if cryptos is None:
            raise InvalidArgumentError("cryptos cannot be None")

        self._cryptos: tuple[Crypto, ...] = tuple(cryptos)

    @property
    def cryptos(self) -> tuple[Crypto, ...]:
        """Registered providers in priority order."""
        return self._cryptos

    def _find_encrypt_provider(self, credential_name: str | None) -> Crypto | None:
        return next((c for c in self._cryptos if c.can_encrypt(credential_name)), None)

    def _find_decrypt_provider(self, credential_name: str | None) -> Crypto | None:
        return next((c for c in self._cryptos if c.can_decrypt(credential_name)), None)

    def _select(self, credential_name: str | None, *, decrypt: bool) -> Crypto:
        if decrypt:
            crypto = self._find_decrypt_provider(credential_name)
        else:
            crypto = self._find_encrypt_provider(credential_name)

        if crypto is None:
            name = display_name(credential_name)
            log.debug("provider_not_found", credential=name, direction="decrypt" if decrypt else "encrypt")
            raise ProviderNotFoundError(
                f"Unable to locate a crypto provider that can locate a credential using credential_name: {name}",
                credential_name=name,
            )
        return crypto

    def encrypt(self, plain: Any, credential_name: str | None = None) -> Any:
        """Encrypt with the first provider that can encrypt with the name.

        Raises:
            ProviderNotFoundError: If no provider can handle the name
        """
        return self._select(credential_name, decrypt=False).encrypt(plain, credential_name)

    def decrypt(self, cipher: Any, credential_name: str | None = None) -> Any:
        """Decrypt with the first provider that can decrypt with the name.

        Raises:
            ProviderNotFoundError: If no provider can handle the name
        """
        return self._select(credential_name, decrypt=True).decrypt(cipher, credential_name)

    def get_encryptor(self, credential_name: str | None = None) -> Encryptor:
        return self._select(credential_name, decrypt=False).get_encryptor(credential_name)

    def get_decryptor(self, credential_name: str | None = None) -> Decryptor:
        return self._select(credential_name, decrypt=True).get_decryptor(credential_name)

    def can_encrypt(self, credential_name: str | None = None) -> bool:
        return self._find_encrypt_provider(credential_name) is not None

    def can_decrypt(self, credential_name: str | None = None) -> bool:
        return self._find_decrypt_provider(credential_name) is not None

    def __repr__(self) -> str:
        return f"CompositeCrypto(cryptos={list(self._cryptos)!r})"
