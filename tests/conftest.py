"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from credcrypt.credentials import Credential
from credcrypt.enums import SymmetricAlgorithm

AES_KEY = bytes(range(16))
TRIPLE_DES_KEY = bytes(range(24))


@pytest.fixture
def aes_key() -> bytes:
    """16-byte AES key."""
    return AES_KEY


@pytest.fixture
def default_credential() -> Credential:
    """Unnamed AES credential."""
    return Credential(lambda: AES_KEY, SymmetricAlgorithm.AES, 16)


@pytest.fixture
def named_credential() -> Credential:
    """AES credential named 'payments'."""
    return Credential(lambda: bytes(range(100, 132)), SymmetricAlgorithm.AES, 16, name="payments")


@pytest.fixture
def triple_des_credential() -> Credential:
    """TripleDES credential named 'legacy'."""
    return Credential(lambda: TRIPLE_DES_KEY, SymmetricAlgorithm.TRIPLE_DES, 8, name="legacy")


def make_crypto_mock(crypto_id: str) -> Mock:
    """Create a crypto provider mock that only handles ``crypto_id``."""
    crypto = Mock(name=f"crypto-{crypto_id}")
    crypto.can_encrypt.side_effect = lambda name=None: name == crypto_id
    crypto.can_decrypt.side_effect = lambda name=None: name == crypto_id

    def encrypt(plain, credential_name=None):
        if isinstance(plain, str):
            return f"EncryptedString : {crypto_id}"
        return crypto_id.encode("utf-8")

    def decrypt(cipher, credential_name=None):
        if isinstance(cipher, str):
            return f"DecryptedString : {crypto_id}"
        return crypto_id.encode("utf-8")

    crypto.encrypt.side_effect = encrypt
    crypto.decrypt.side_effect = decrypt
    crypto.get_encryptor.return_value = Mock(name=f"encryptor-{crypto_id}")
    crypto.get_decryptor.return_value = Mock(name=f"decryptor-{crypto_id}")
    return crypto


@pytest.fixture
def crypto_factory():
    """Factory for provider mocks handling a single credential name."""
    return make_crypto_mock
