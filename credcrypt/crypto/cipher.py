"""Symmetric cipher handles built on the ``cryptography`` package.

Security Model:
- CBC mode with PKCS7 padding
- Fresh random IV per encryption, stored in front of the cipher bytes
- Binary format: version byte (0x01) + IV + cipher bytes
- Text cipher values are standard base64 of the binary format
"""

import base64
import binascii
import codecs
import os
from typing import Any

import structlog
from cryptography.hazmat.decrepit.ciphers.algorithms import Camellia, TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from credcrypt.credentials import Credential
from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import EncryptionError

log = structlog.get_logger(__name__)

FORMAT_VERSION = 0x01

_ALGORITHMS: dict[SymmetricAlgorithm, Any] = {
    SymmetricAlgorithm.AES: algorithms.AES,
    SymmetricAlgorithm.TRIPLE_DES: TripleDES,
    SymmetricAlgorithm.CAMELLIA: Camellia,
}


class _SymmetricHandle:
    """Shared state of encryptor and decryptor handles."""

    def __init__(self, credential: Credential, encoding: str = "utf-8") -> None:
        """Initialize handle.

        Args:
            credential: Resolved credential the handle is bound to
            encoding: Text encoding for str input and output

        Raises:
            EncryptionError: If the key or IV size does not fit the algorithm
        """
        algorithm = credential.algorithm
        key = credential.key

        if len(key) not in algorithm.key_sizes:
            raise EncryptionError(
                f"Invalid key size for {algorithm}: {len(key)} bytes "
                f"(expected one of {sorted(algorithm.key_sizes)})"
            )
        if credential.iv_size != algorithm.block_size:
            raise EncryptionError(
                f"Invalid IV size for {algorithm}: {credential.iv_size} bytes (expected {algorithm.block_size})"
            )

        self.credential = credential
        self.encoding = codecs.lookup(encoding).name
        self._algorithm: Any = _ALGORITHMS[algorithm](key)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise EncryptionError("Operation on a closed cipher handle")

    def _cipher(self, iv: bytes) -> Cipher:
        return Cipher(self._algorithm, modes.CBC(iv))

    def close(self) -> None:
        """Drop the key material held by this handle. Safe to call twice."""
        if not self._closed:
            self._algorithm = None
            self._closed = True

    def __enter__(self) -> Any:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"{type(self).__name__}({self.credential!r}, encoding={self.encoding!r}, {state})"


class SymmetricEncryptor(_SymmetricHandle):
    """Encrypt text or bytes with a single credential.

    Example:
        >>> with SymmetricEncryptor(credential) as encryptor:
        ...     token = encryptor.encrypt("hello")
    """

    def encrypt(self, plain: Any) -> Any:
        """Encrypt text or bytes.

        Args:
            plain: ``str`` (returns base64 ``str``) or bytes (returns ``bytes``)

        Returns:
            Cipher value of the same kind as the input

        Raises:
            EncryptionError: If the handle is closed
            TypeError: If plain is neither str nor bytes
        """
        if isinstance(plain, str):
            cipher_bytes = self._encrypt_bytes(plain.encode(self.encoding))
            return base64.b64encode(cipher_bytes).decode("ascii")
        if isinstance(plain, (bytes, bytearray, memoryview)):
            return self._encrypt_bytes(bytes(plain))
        raise TypeError(f"Expected str or bytes, got {type(plain).__name__}")

    def _encrypt_bytes(self, data: bytes) -> bytes:
        self._check_open()

        iv = os.urandom(self.credential.iv_size)
        padder = padding.PKCS7(self._algorithm.block_size).padder()
        padded = padder.update(data) + padder.finalize()

        encryptor = self._cipher(iv).encryptor()
        body = encryptor.update(padded) + encryptor.finalize()
        return bytes([FORMAT_VERSION]) + iv + body


class SymmetricDecryptor(_SymmetricHandle):
    """Decrypt values produced by SymmetricEncryptor with the same credential."""

    def decrypt(self, cipher: Any) -> Any:
        """Decrypt text or bytes.

        Args:
            cipher: base64 ``str`` (returns ``str``) or bytes (returns ``bytes``)

        Returns:
            Plain value of the same kind as the input

        Raises:
            EncryptionError: If the cipher value is malformed or the handle is closed
            TypeError: If cipher is neither str nor bytes
        """
        if isinstance(cipher, str):
            try:
                raw = base64.b64decode(cipher, validate=True)
            except (binascii.Error, ValueError) as e:
                raise EncryptionError("Cipher text is not valid base64") from e
            plain = self._decrypt_bytes(raw)
            try:
                return plain.decode(self.encoding)
            except UnicodeDecodeError as e:
                raise EncryptionError(f"Decrypted value is not valid {self.encoding} text") from e
        if isinstance(cipher, (bytes, bytearray, memoryview)):
            return self._decrypt_bytes(bytes(cipher))
        raise TypeError(f"Expected str or bytes, got {type(cipher).__name__}")

    def _decrypt_bytes(self, data: bytes) -> bytes:
        self._check_open()

        iv_size = self.credential.iv_size
        block_size = self.credential.algorithm.block_size
        body_size = len(data) - 1 - iv_size

        if body_size <= 0 or body_size % block_size:
            raise EncryptionError("Cipher value has an invalid length")
        if data[0] != FORMAT_VERSION:
            raise EncryptionError(f"Unsupported cipher format version: {data[0]}")

        iv = data[1 : 1 + iv_size]
        decryptor = self._cipher(iv).decryptor()
        padded = decryptor.update(data[1 + iv_size :]) + decryptor.finalize()

        unpadder = padding.PKCS7(self._algorithm.block_size).unpadder()
        try:
            return unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            log.debug("decrypt_padding_invalid", credential=self.credential.name or "default")
            raise EncryptionError("Decryption failed: wrong key or corrupted cipher value") from e
