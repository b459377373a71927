"""Immutable credential value with lazily materialized key bytes."""

import threading
from collections.abc import Callable

import structlog

from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import InvalidArgumentError

log = structlog.get_logger(__name__)

KeyFactory = Callable[[], bytes]


class Credential:
    """Describe how to obtain a key, which cipher to use and the IV size.

    The key factory is invoked at most once; its result is cached for the
    lifetime of the credential. Concurrent first use from several threads is
    serialized so the factory never runs twice.

    A credential with no name (``None`` or ``""``) is the *default* credential
    of whichever cache indexes it.

    Example:
        >>> credential = Credential(
        ...     lambda: bytes(16),
        ...     algorithm=SymmetricAlgorithm.AES,
        ...     iv_size=16,
        ...     name="payments",
        ... )
        >>> len(credential.key)
        16
    """

    __slots__ = ("_key_factory", "_algorithm", "_iv_size", "_name", "_key", "_lock")

    def __init__(
        self,
        key_factory: KeyFactory,
        algorithm: SymmetricAlgorithm | str = SymmetricAlgorithm.AES,
        iv_size: int = 16,
        name: str | None = None,
    ) -> None:
        """Initialize credential.

        Args:
            key_factory: Zero-argument callable returning the key bytes
            algorithm: Cipher algorithm the key is used with
            iv_size: Number of initialization vector bytes the algorithm expects
            name: Credential name, or None for the default credential

        Raises:
            InvalidArgumentError: If any argument is malformed
        """
        if not callable(key_factory):
            raise InvalidArgumentError("key_factory must be callable")
        if isinstance(iv_size, bool) or not isinstance(iv_size, int) or iv_size <= 0:
            raise InvalidArgumentError(f"iv_size must be a positive integer, got {iv_size!r}")
        try:
            algorithm = SymmetricAlgorithm(algorithm)
        except ValueError as e:
            raise InvalidArgumentError(f"Unsupported algorithm: {algorithm}") from e

        self._key_factory = key_factory
        self._algorithm = algorithm
        self._iv_size = iv_size
        self._name = name or None
        self._key: bytes | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str | None:
        """Credential name, None for the default credential."""
        return self._name

    @property
    def algorithm(self) -> SymmetricAlgorithm:
        return self._algorithm

    @property
    def iv_size(self) -> int:
        return self._iv_size

    @property
    def is_default(self) -> bool:
        return self._name is None

    @property
    def key(self) -> bytes:
        """Key bytes, produced by the key factory on first access.

        Raises:
            InvalidArgumentError: If the factory returns an empty or non-bytes value
        """
        key = self._key
        if key is not None:
            return key

        with self._lock:
            if self._key is None:
                self._key = self._materialize()
            return self._key

    def _materialize(self) -> bytes:
        value = self._key_factory()
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError(
                f"Key factory for credential '{self._name or 'default'}' returned "
                f"{type(value).__name__}, expected bytes"
            )
        key = bytes(value)
        if not key:
            raise InvalidArgumentError(f"Key factory for credential '{self._name or 'default'}' returned an empty key")

        log.debug("credential_key_materialized", credential=self._name or "default", algorithm=str(self._algorithm))
        return key

    def __repr__(self) -> str:
        return f"Credential(name={self._name!r}, algorithm={self._algorithm.value!r}, iv_size={self._iv_size})"
