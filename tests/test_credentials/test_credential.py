"""Tests for the Credential value."""

import threading
import time
from unittest.mock import Mock

import pytest

from credcrypt.credentials import Credential
from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import InvalidArgumentError


class TestCredential:
    """Test Credential construction and key materialization."""

    def test_properties(self):
        """Test constructor arguments are exposed."""
        credential = Credential(lambda: bytes(16), SymmetricAlgorithm.AES, 16, name="foo")

        assert credential.name == "foo"
        assert credential.algorithm is SymmetricAlgorithm.AES
        assert credential.iv_size == 16
        assert not credential.is_default

    def test_algorithm_accepts_string(self):
        """Test algorithm given by value."""
        credential = Credential(lambda: bytes(24), "tripledes", 8)

        assert credential.algorithm is SymmetricAlgorithm.TRIPLE_DES

    def test_empty_name_is_default(self):
        """Test empty name is normalized to the default slot."""
        credential = Credential(lambda: bytes(16), name="")

        assert credential.name is None
        assert credential.is_default

    def test_key_factory_called_once(self):
        """Test key bytes are cached after first access."""
        factory = Mock(return_value=b"k" * 16)
        credential = Credential(factory)

        assert factory.call_count == 0
        assert credential.key == b"k" * 16
        assert credential.key == b"k" * 16
        factory.assert_called_once_with()

    def test_key_copied_to_bytes(self):
        """Test a mutable factory result cannot change the cached key."""
        source = bytearray(b"a" * 16)
        credential = Credential(lambda: source)

        key = credential.key
        source[0] = ord("z")

        assert isinstance(key, bytes)
        assert credential.key == b"a" * 16

    def test_concurrent_first_use_runs_factory_once(self):
        """Test concurrent first access does not race the factory."""
        calls = []

        def slow_factory():
            calls.append(1)
            time.sleep(0.05)
            return bytes(16)

        credential = Credential(slow_factory)
        threads = [threading.Thread(target=lambda: credential.key) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1

    def test_factory_error_is_propagated_and_retried(self):
        """Test a failing factory leaves the key unset."""
        factory = Mock(side_effect=[RuntimeError("vault down"), bytes(16)])
        credential = Credential(factory)

        with pytest.raises(RuntimeError, match="vault down"):
            _ = credential.key

        assert credential.key == bytes(16)
        assert factory.call_count == 2

    def test_non_bytes_key_rejected(self):
        """Test factory returning str raises."""
        credential = Credential(lambda: "not-bytes", name="foo")

        with pytest.raises(InvalidArgumentError, match="expected bytes"):
            _ = credential.key

    def test_empty_key_rejected(self):
        """Test factory returning empty bytes raises."""
        credential = Credential(lambda: b"")

        with pytest.raises(InvalidArgumentError, match="empty key"):
            _ = credential.key

    def test_non_callable_factory_rejected(self):
        """Test key_factory must be callable."""
        with pytest.raises(InvalidArgumentError, match="callable"):
            Credential(b"raw-key")

    @pytest.mark.parametrize("iv_size", [0, -1, 1.5, True])
    def test_invalid_iv_size_rejected(self, iv_size):
        """Test iv_size must be a positive integer."""
        with pytest.raises(InvalidArgumentError, match="iv_size"):
            Credential(lambda: bytes(16), iv_size=iv_size)

    def test_unknown_algorithm_rejected(self):
        """Test unsupported algorithm value."""
        with pytest.raises(InvalidArgumentError, match="Unsupported algorithm"):
            Credential(lambda: bytes(16), algorithm="rc2")

    def test_repr_hides_key(self):
        """Test repr never contains key material."""
        credential = Credential(lambda: b"supersecretkey!!", name="foo")
        _ = credential.key

        assert "supersecret" not in repr(credential)
        assert "foo" in repr(credential)
