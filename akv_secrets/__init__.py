# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Resolve Azure Key Vault secrets and certificates into plain strings.

A descriptor names a vault, an object and its type. Secrets resolve to their
stored value; certificates resolve to a PKCS#8 private key PEM followed by the
certificate PEM.

Example:
    >>> from akv_secrets import SecretDescriptor, create_secret_resolver
    >>> resolver = create_secret_resolver()
    >>> value = resolver.resolve(SecretDescriptor("my-vault", "db-password"))
"""

from .auth import AuthContext, Authenticator, EnvironmentAuthenticator, StaticTokenAuthenticator
from .certificate import certificate_to_pem, parse_certificate
from .client import AzureKeyVaultClient, VaultClient, VaultClientFactory
from .config import ConfigProvider, EnvConfigProvider, ResolverConfig
from .descriptor import LATEST_VERSION, ObjectType, SecretDescriptor, vault_endpoint
from .exceptions import (
    AuthError,
    DecodeError,
    KeyEncodingError,
    ObjectNotFoundError,
    ProviderFetchError,
    VaultConfigError,
    VaultError,
)
from .factory import create_authenticator, create_secret_resolver, resolve_secret
from .models import CertificateBundle, KeyBundle, SecretBundle
from .resolver import SecretResolver

__all__ = [
    "AuthContext",
    "Authenticator",
    "EnvironmentAuthenticator",
    "StaticTokenAuthenticator",
    "certificate_to_pem",
    "parse_certificate",
    "AzureKeyVaultClient",
    "VaultClient",
    "VaultClientFactory",
    "ConfigProvider",
    "EnvConfigProvider",
    "ResolverConfig",
    "LATEST_VERSION",
    "ObjectType",
    "SecretDescriptor",
    "vault_endpoint",
    "AuthError",
    "DecodeError",
    "KeyEncodingError",
    "ObjectNotFoundError",
    "ProviderFetchError",
    "VaultConfigError",
    "VaultError",
    "create_authenticator",
    "create_secret_resolver",
    "resolve_secret",
    "CertificateBundle",
    "KeyBundle",
    "SecretBundle",
    "SecretResolver",
]

__version__ = "0.1.0"
