"""Configuration loading for credcrypt."""

from .settings import CredentialConfig, CryptoSettings, ProviderConfig

__all__ = ["CredentialConfig", "CryptoSettings", "ProviderConfig"]
