"""Tests for symmetric cipher handles."""

import base64

import pytest
from cryptography.hazmat.decrepit.ciphers import algorithms as decrepit_algorithms
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from credcrypt.credentials import Credential
from credcrypt.crypto import Decryptor, Encryptor, SymmetricDecryptor, SymmetricEncryptor
from credcrypt.crypto.cipher import _ALGORITHMS, FORMAT_VERSION
from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import EncryptionError


class TestSymmetricEncryptor:
    """Test encryption handles."""

    def test_encrypt_string(self, default_credential):
        """Test string input produces base64 cipher text."""
        encryptor = SymmetricEncryptor(default_credential)

        encrypted = encryptor.encrypt("This is some string")

        assert encrypted
        assert encrypted != "This is some string"
        assert base64.b64decode(encrypted)[0] == FORMAT_VERSION

    def test_encrypt_bytes(self, default_credential):
        """Test bytes input produces cipher bytes."""
        encryptor = SymmetricEncryptor(default_credential)
        plain = "This is some string".encode("utf-8")

        encrypted = encryptor.encrypt(plain)

        assert isinstance(encrypted, bytes)
        assert encrypted != plain
        # version byte + IV + two AES blocks
        assert len(encrypted) == 1 + 16 + 32

    def test_encrypt_uses_fresh_iv(self, default_credential):
        """Test the same plain text encrypts differently each time."""
        encryptor = SymmetricEncryptor(default_credential)

        assert encryptor.encrypt(b"same") != encryptor.encrypt(b"same")

    def test_encrypt_rejects_other_types(self, default_credential):
        """Test non str/bytes input."""
        with pytest.raises(TypeError):
            SymmetricEncryptor(default_credential).encrypt(42)

    def test_invalid_key_size(self):
        """Test key length must match the algorithm."""
        credential = Credential(lambda: bytes(10), SymmetricAlgorithm.AES, 16)

        with pytest.raises(EncryptionError, match="Invalid key size"):
            SymmetricEncryptor(credential)

    def test_invalid_iv_size(self):
        """Test IV size must match the block size."""
        credential = Credential(lambda: bytes(16), SymmetricAlgorithm.AES, 8)

        with pytest.raises(EncryptionError, match="Invalid IV size"):
            SymmetricEncryptor(credential)

    def test_closed_handle_rejects_use(self, default_credential):
        """Test encrypting after close."""
        encryptor = SymmetricEncryptor(default_credential)
        encryptor.close()
        encryptor.close()

        assert encryptor.closed
        with pytest.raises(EncryptionError, match="closed"):
            encryptor.encrypt(b"data")

    def test_context_manager_closes(self, default_credential):
        """Test with-block closes the handle."""
        with SymmetricEncryptor(default_credential) as encryptor:
            encryptor.encrypt(b"data")

        assert encryptor.closed

    def test_satisfies_protocol(self, default_credential):
        """Test structural protocol conformance."""
        assert isinstance(SymmetricEncryptor(default_credential), Encryptor)
        assert isinstance(SymmetricDecryptor(default_credential), Decryptor)


class TestSymmetricDecryptor:
    """Test decryption handles."""

    @pytest.mark.parametrize(
        "credential_fixture",
        ["default_credential", "named_credential", "triple_des_credential"],
    )
    def test_round_trip_bytes(self, request, credential_fixture):
        """Test bytes round trip for each algorithm."""
        credential = request.getfixturevalue(credential_fixture)
        plain = bytes(range(256))

        encrypted = SymmetricEncryptor(credential).encrypt(plain)

        assert SymmetricDecryptor(credential).decrypt(encrypted) == plain

    def test_round_trip_camellia(self):
        """Test Camellia round trip."""
        credential = Credential(lambda: bytes(32), SymmetricAlgorithm.CAMELLIA, 16)

        encrypted = SymmetricEncryptor(credential).encrypt("camellia")

        assert SymmetricDecryptor(credential).decrypt(encrypted) == "camellia"

    def test_legacy_ciphers_use_decrepit_module(self):
        """Test Camellia and TripleDES come from their current import location."""
        assert _ALGORITHMS[SymmetricAlgorithm.CAMELLIA] is decrepit_algorithms.Camellia
        assert _ALGORITHMS[SymmetricAlgorithm.TRIPLE_DES] is decrepit_algorithms.TripleDES

    def test_round_trip_empty(self, default_credential):
        """Test empty input round trip."""
        encrypted = SymmetricEncryptor(default_credential).encrypt(b"")

        assert SymmetricDecryptor(default_credential).decrypt(encrypted) == b""

    def test_round_trip_text_with_encoding(self, default_credential):
        """Test text encoding is applied on both sides."""
        encrypted = SymmetricEncryptor(default_credential, "utf-16").encrypt("héllo wörld")

        assert SymmetricDecryptor(default_credential, "utf-16").decrypt(encrypted) == "héllo wörld"

    def test_invalid_base64(self, default_credential):
        """Test malformed cipher text."""
        with pytest.raises(EncryptionError, match="base64"):
            SymmetricDecryptor(default_credential).decrypt("***not-base64***")

    def test_too_short(self, default_credential):
        """Test truncated cipher value."""
        with pytest.raises(EncryptionError, match="invalid length"):
            SymmetricDecryptor(default_credential).decrypt(b"\x01" + bytes(16))

    def test_unknown_version(self, default_credential):
        """Test unsupported format version."""
        encrypted = bytearray(SymmetricEncryptor(default_credential).encrypt(b"data"))
        encrypted[0] = 0x7F

        with pytest.raises(EncryptionError, match="format version"):
            SymmetricDecryptor(default_credential).decrypt(bytes(encrypted))

    def test_invalid_padding_raises(self, default_credential):
        """Test a body that decrypts to a zero padding byte is rejected."""
        iv = bytes(range(16))
        encryptor = Cipher(algorithms.AES(default_credential.key), modes.CBC(iv)).encryptor()
        body = encryptor.update(bytes(16)) + encryptor.finalize()

        with pytest.raises(EncryptionError, match="wrong key or corrupted"):
            SymmetricDecryptor(default_credential).decrypt(bytes([FORMAT_VERSION]) + iv + body)
