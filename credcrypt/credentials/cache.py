"""Name-indexed lookup over a fixed collection of credentials."""

from collections.abc import Iterable
from typing import Final

import structlog

from credcrypt.exceptions import (
    CredentialNotFoundError,
    DuplicateCredentialError,
    InvalidArgumentError,
)

from .credential import Credential

log = structlog.get_logger(__name__)


class _DefaultKey:
    """Lookup key of the unnamed credential slot."""

    _instance = None

    def __new__(cls) -> "_DefaultKey":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT: Final = _DefaultKey()

CredentialKey = _DefaultKey | str


def credential_key(name: str | None) -> CredentialKey:
    """Map an optional credential name to its lookup key."""
    return name if name else DEFAULT


def display_name(name: str | None) -> str:
    """Name used in messages and logs; "default" for the unnamed slot."""
    return name if name else "default"


class CredentialCache:
    """Index credentials by optional name.

    At most one credential may be unnamed (the default credential) and the
    names of the remaining ones must be unique. Both rules are checked when the
    cache is built; the cache never changes afterwards, so it is safe to share
    between threads.

    Example:
        >>> cache = CredentialCache([default_credential, payments_credential])
        >>> cache.resolve(None) is default_credential
        True
        >>> cache.probe("missing")
        False
    """

    def __init__(self, credentials: Iterable[Credential]) -> None:
        """Initialize credential cache.

        Args:
            credentials: Credentials to index

        Raises:
            InvalidArgumentError: If credentials is None
            DuplicateCredentialError: If two credentials resolve to the same key
        """
        if credentials is None:
            raise InvalidArgumentError("credentials cannot be None")

        self._credentials: dict[CredentialKey, Credential] = {}
        for credential in credentials:
            key = credential_key(credential.name)
            if key in self._credentials:
                if key is DEFAULT:
                    raise DuplicateCredentialError(
                        "More than one default (unnamed) credential was provided",
                        credential_name=display_name(credential.name),
                        suggestion="Give every credential but one a unique name",
                    )
                raise DuplicateCredentialError(
                    f"Duplicate credential name: {credential.name}",
                    credential_name=credential.name,
                )
            self._credentials[key] = credential

        log.debug(
            "credential_cache_built",
            named=len(self.credentials),
            has_default=DEFAULT in self._credentials,
        )

    @property
    def credentials(self) -> tuple[Credential, ...]:
        """Named (non-default) credentials in construction order."""
        return tuple(c for k, c in self._credentials.items() if k is not DEFAULT)

    @property
    def default_credential(self) -> Credential | None:
        """The unnamed credential, if any."""
        return self._credentials.get(DEFAULT)

    def try_get(self, name: str | None) -> Credential | None:
        """Look up a credential without raising.

        Args:
            name: Credential name, or None for the default credential

        Returns:
            Matching credential or None
        """
        return self._credentials.get(credential_key(name))

    def resolve(self, name: str | None) -> Credential:
        """Look up a credential.

        Args:
            name: Credential name, or None for the default credential

        Returns:
            Matching credential

        Raises:
            CredentialNotFoundError: If no credential matches
        """
        credential = self.try_get(name)
        if credential is None:
            log.debug("credential_not_found", credential=display_name(name))
            raise CredentialNotFoundError(
                f"Unable to locate credential using credential_name: {display_name(name)}",
                credential_name=display_name(name),
            )
        return credential

    def probe(self, name: str | None) -> bool:
        """Check whether a credential exists without touching its key."""
        return credential_key(name) in self._credentials

    def __contains__(self, name: object) -> bool:
        if name is not None and not isinstance(name, str):
            return False
        return self.probe(name)

    def __len__(self) -> int:
        return len(self._credentials)
