"""Custom exception hierarchy for credcrypt.

Exception Hierarchy:
    CredcryptError (base)
    ├── ConfigurationError
    ├── InvalidArgumentError
    ├── CredentialError
    │   ├── DuplicateCredentialError
    │   ├── CredentialNotFoundError
    │   └── ProviderNotFoundError
    └── EncryptionError

Lookup errors (``CredentialNotFoundError``, ``ProviderNotFoundError``) are
scoped to the call that raised them; a crypto instance stays usable for other
credential names afterwards.

Example Usage:
    >>> from credcrypt.exceptions import CredentialNotFoundError
    >>> try:
    ...     crypto.encrypt("secret", "payments")
    ... except CredentialNotFoundError as e:
    ...     print(e.credential_name)
"""


class CredcryptError(Exception):
    """Base exception for all credcrypt errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(CredcryptError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Unknown key reference format
    """

    pass


class InvalidArgumentError(CredcryptError):
    """A required constructor argument was missing or malformed."""

    pass


class CredentialError(CredcryptError):
    """Credential-related errors.

    Attributes:
        message: Human-readable error description
        credential_name: The credential name involved, "default" for the
            unnamed credential
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        credential_name: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            credential_name: The credential name that failed
            suggestion: Optional suggestion for resolution
        """
        self.credential_name = credential_name
        self.suggestion = suggestion

        full_message = message
        if credential_name:
            full_message = f"{message} (credential: {credential_name})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # Preserve original message (super sets self.message to full_message)
        self.message = message


class DuplicateCredentialError(CredentialError):
    """Two credentials share a name, or more than one has no name."""

    pass


class CredentialNotFoundError(CredentialError):
    """No credential matches the requested name."""

    pass


class ProviderNotFoundError(CredentialError):
    """No registered crypto provider can handle the requested name."""

    pass


class EncryptionError(CredcryptError):
    """Encryption or decryption operation failed."""

    pass
