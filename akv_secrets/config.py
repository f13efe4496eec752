# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Environment-backed resolver configuration."""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .descriptor import DEFAULT_DNS_SUFFIX
from .exceptions import VaultConfigError

# Audience every vault token is scoped to, whatever vault is being read
DEFAULT_RESOURCE_AUDIENCE = "https://vault.azure.net"


class ConfigProvider(ABC):
    """Abstract base class for configuration providers."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        raise NotImplementedError

    @abstractmethod
    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean configuration value."""
        raise NotImplementedError


class EnvConfigProvider(ConfigProvider):
    """Configuration provider that reads from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str, default: Any = None) -> Any:
        return self._environ.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._environ.get(key)
        if value is None:
            return default

        value_lower = value.lower()
        if value_lower in ("true", "1", "yes", "on"):
            return True
        if value_lower in ("false", "0", "no", "off"):
            return False
        return default


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every resolution.

    Environment variables:
    - AZURE_KEYVAULT_RESOURCE: token audience (default "https://vault.azure.net")
    - AZURE_KEYVAULT_DNS_SUFFIX: vault host suffix (default "vault.azure.net")
    - AZURE_KEYVAULT_AUTH: authenticator type (default "environment")
    - AZURE_KEYVAULT_TOKEN: bearer token, required when the authenticator type
      is "static"
    - AZURE_KEYVAULT_VERIFY_CHALLENGE_RESOURCE: require the auth challenge to
      name a resource on the vault domain (default true)

    Sovereign clouds override both the audience and the suffix, e.g.
    "https://vault.azure.cn" and "vault.azure.cn".
    """

    resource_audience: str = DEFAULT_RESOURCE_AUDIENCE
    dns_suffix: str = DEFAULT_DNS_SUFFIX
    authenticator_type: str = "environment"
    verify_challenge_resource: bool = True
    token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.resource_audience or not self.resource_audience.strip():
            raise VaultConfigError("resource_audience must not be empty")
        if not self.dns_suffix or not self.dns_suffix.strip():
            raise VaultConfigError("dns_suffix must not be empty")
        if self.authenticator_type == "static" and not self.token:
            raise VaultConfigError("static authentication requires AZURE_KEYVAULT_TOKEN")

    @classmethod
    def from_provider(cls, provider: ConfigProvider | None = None) -> "ResolverConfig":
        """Load the configuration, reading the environment when no provider is given."""
        provider = provider or EnvConfigProvider()
        return cls(
            resource_audience=provider.get("AZURE_KEYVAULT_RESOURCE", DEFAULT_RESOURCE_AUDIENCE),
            dns_suffix=provider.get("AZURE_KEYVAULT_DNS_SUFFIX", DEFAULT_DNS_SUFFIX).strip("."),
            authenticator_type=provider.get("AZURE_KEYVAULT_AUTH", "environment").lower(),
            verify_challenge_resource=provider.get_bool("AZURE_KEYVAULT_VERIFY_CHALLENGE_RESOURCE", True),
            token=provider.get("AZURE_KEYVAULT_TOKEN"),
        )
