# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Exceptions raised while resolving Key Vault objects."""


class VaultError(Exception):
    """Base exception for secret resolution errors."""
    pass


class VaultConfigError(VaultError):
    """Raised when resolver configuration is invalid."""
    pass


class AuthError(VaultError):
    """Raised when a credential or a vault client cannot be obtained."""
    pass


class ProviderFetchError(VaultError):
    """Raised when a Key Vault call fails.

    Attributes:
        object_kind: Kind of object being fetched ("certificate", "key" or "secret")
        object_name: Name of the object in the vault
    """

    def __init__(self, message: str, object_kind: str, object_name: str | None = None):
        super().__init__(message)
        self.object_kind = object_kind
        self.object_name = object_name


class ObjectNotFoundError(ProviderFetchError):
    """Raised when the requested object does not exist or has no value."""
    pass


class DecodeError(VaultError):
    """Raised when certificate bytes do not parse as X.509."""
    pass


class KeyEncodingError(DecodeError):
    """Raised when no usable private key text can be built for a certificate."""
    pass
