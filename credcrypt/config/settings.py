"""
Configuration system using Pydantic for type-safe settings management.

Describes crypto providers and their credentials, loaded from YAML and
turned into ready-to-use crypto objects.

Example configuration::

    encoding: utf-8
    providers:
      - name: primary
        credentials:
          - key: ${APP_DEFAULT_KEY}
          - name: payments
            algorithm: aes
            iv_size: 16
            key: "@file:/run/secrets/payments.key"
      - name: legacy
        credentials:
          - name: archive
            algorithm: tripledes
            iv_size: 8
            key: ${ARCHIVE_KEY}
"""

from __future__ import annotations

import codecs
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from credcrypt.credentials import Credential, key_factory_from_reference
from credcrypt.crypto import CompositeCrypto, SymmetricCrypto
from credcrypt.enums import SymmetricAlgorithm
from credcrypt.exceptions import ConfigurationError

log = structlog.get_logger(__name__)


class CredentialConfig(BaseModel):
    """A single credential.

    The key is a reference, not key material:
    - key: "${APP_KEY}"              (base64 in an environment variable)
    - key: "@file:/run/secrets/key"  (raw bytes in a file)
    - key: "base64:AAECAwQ..."       (inline, tests only)
    """

    name: str | None = Field(default=None, description="Credential name; omit for the default credential")
    algorithm: SymmetricAlgorithm = Field(default=SymmetricAlgorithm.AES, description="Cipher algorithm")
    iv_size: int = Field(default=16, ge=1, description="Initialization vector size in bytes")
    key: str = Field(..., description="Key reference (${ENV}, @file:, base64:)")

    def to_credential(self) -> Credential:
        """Build a credential whose key is loaded on first use."""
        return Credential(
            key_factory_from_reference(self.key),
            algorithm=self.algorithm,
            iv_size=self.iv_size,
            name=self.name,
        )


class ProviderConfig(BaseModel):
    """A symmetric crypto provider and the credentials it owns."""

    name: str = Field(..., description="Provider identifier used in logs")
    credentials: list[CredentialConfig] = Field(default_factory=list)

    def build(self, encoding: str = "utf-8") -> SymmetricCrypto:
        return SymmetricCrypto([c.to_credential() for c in self.credentials], encoding=encoding)


class CryptoSettings(BaseSettings):
    """Top-level credcrypt settings.

    Settings absent from the YAML file fall back to ``CREDCRYPT_``
    environment variables (e.g. ``CREDCRYPT_LOG_LEVEL=DEBUG``).
    """

    model_config = SettingsConfigDict(env_prefix="CREDCRYPT_", extra="ignore")

    encoding: str = Field(default="utf-8", description="Text encoding for str values")
    log_level: str = Field(default="INFO", description="Logging level")
    providers: list[ProviderConfig] = Field(default_factory=list)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {value}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> CryptoSettings:
        """Load settings from a YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            CryptoSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    def build_crypto(self) -> CompositeCrypto:
        """Build one SymmetricCrypto per provider, routed through a CompositeCrypto.

        Raises:
            ConfigurationError: If a key reference is malformed
            DuplicateCredentialError: If credential names collide within a provider
        """
        cryptos = []
        for provider in self.providers:
            cryptos.append(provider.build(self.encoding))
            log.debug("provider_built", provider=provider.name, credentials=len(provider.credentials))

        log.debug("crypto_built", providers=[p.name for p in self.providers])
        return CompositeCrypto(cryptos)
