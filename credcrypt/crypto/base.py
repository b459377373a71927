"""Capability protocols shared by every crypto provider."""

from typing import Protocol, TypeVar, runtime_checkable

Data = TypeVar("Data", str, bytes)


@runtime_checkable
class Encryptor(Protocol):
    """Handle bound to one resolved credential, used for encryption.

    Handles should be closed once the caller is done with them, either
    explicitly or by using them as context managers.
    """

    def encrypt(self, plain: Data) -> Data:
        """Encrypt text or bytes.

        Args:
            plain: Plain text (``str``) or plain bytes

        Returns:
            Base64 cipher text for ``str`` input, raw cipher bytes for ``bytes``
        """
        ...

    def close(self) -> None:
        """Release the cipher resources held by this handle."""
        ...

    def __enter__(self) -> "Encryptor": ...

    def __exit__(self, *exc_info: object) -> None: ...


@runtime_checkable
class Decryptor(Protocol):
    """Handle bound to one resolved credential, used for decryption."""

    def decrypt(self, cipher: Data) -> Data:
        """Decrypt text or bytes.

        Args:
            cipher: Base64 cipher text (``str``) or raw cipher bytes

        Returns:
            Plain text for ``str`` input, plain bytes for ``bytes``
        """
        ...

    def close(self) -> None:
        """Release the cipher resources held by this handle."""
        ...

    def __enter__(self) -> "Decryptor": ...

    def __exit__(self, *exc_info: object) -> None: ...


@runtime_checkable
class Crypto(Protocol):
    """Protocol defining the interface for crypto providers.

    Every provider must implement these methods to be usable on its own or
    registered with a CompositeCrypto. ``credential_name=None`` selects the
    provider's default credential.
    """

    def encrypt(self, plain: Data, credential_name: str | None = None) -> Data:
        """Encrypt text or bytes with the named credential.

        Raises:
            CredentialNotFoundError: If the provider has no such credential
        """
        ...

    def decrypt(self, cipher: Data, credential_name: str | None = None) -> Data:
        """Decrypt text or bytes with the named credential.

        Raises:
            CredentialNotFoundError: If the provider has no such credential
        """
        ...

    def get_encryptor(self, credential_name: str | None = None) -> Encryptor:
        """Create an encryptor handle; the caller owns closing it."""
        ...

    def get_decryptor(self, credential_name: str | None = None) -> Decryptor:
        """Create a decryptor handle; the caller owns closing it."""
        ...

    def can_encrypt(self, credential_name: str | None = None) -> bool:
        """Check whether this provider can encrypt with the named credential."""
        ...

    def can_decrypt(self, credential_name: str | None = None) -> bool:
        """Check whether this provider can decrypt with the named credential."""
        ...
