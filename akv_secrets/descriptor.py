# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Secret descriptors and vault endpoint derivation."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_DNS_SUFFIX = "vault.azure.net"

# Provider calls always ask for the current version of an object.
LATEST_VERSION = ""


class ObjectType(str, Enum):
    """Kind of vault object a descriptor points at.

    Values that are not recognized resolve to ``DEFAULT`` instead of failing,
    so a new object kind must be added here before it can be routed anywhere
    else.
    """

    CERTIFICATE = "certificate"
    SECRET = "secret"
    # Alias of SECRET; empty and unrecognized tags resolve here
    DEFAULT = "secret"

    @classmethod
    def parse(cls, value: Any) -> "ObjectType":
        """Map a raw object type tag to an ``ObjectType`` (case-insensitive).

        Non-string tags, such as a number read from a manifest, fall back to
        ``DEFAULT`` like any other unrecognized value.
        """
        if isinstance(value, ObjectType):
            return value
        if not isinstance(value, str):
            return cls.DEFAULT
        normalized = value.lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.DEFAULT


@dataclass(frozen=True)
class SecretDescriptor:
    """Reference to one object stored in an Azure Key Vault.

    Attributes:
        vault_name: Name of the vault; the endpoint is derived from it
        object_name: Name of the object within the vault
        object_type: Kind of object; strings are parsed with ``ObjectType.parse``
    """

    vault_name: str
    object_name: str
    object_type: ObjectType = ObjectType.SECRET

    def __post_init__(self) -> None:
        if not self.vault_name:
            raise ValueError("vault_name must not be empty")
        if not self.object_name:
            raise ValueError("object_name must not be empty")
        object.__setattr__(self, "object_type", ObjectType.parse(self.object_type))

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, Any]) -> "SecretDescriptor":
        """Build a descriptor from an ``AzureKeyVaultSecret`` resource document.

        Only ``spec.vault`` is read::

            spec:
              vault:
                name: my-vault
                objectName: tls-cert
                objectType: certificate

        Raises:
            ValueError: If ``spec.vault`` or one of its names is missing
        """
        spec = manifest.get("spec")
        vault = spec.get("vault") if isinstance(spec, Mapping) else None
        if not isinstance(vault, Mapping):
            raise ValueError("manifest has no spec.vault section")

        return cls(
            vault_name=vault.get("name") or "",
            object_name=vault.get("objectName") or "",
            object_type=vault.get("objectType"),
        )


def vault_endpoint(vault_name: str, dns_suffix: str = DEFAULT_DNS_SUFFIX) -> str:
    """Return the base URL of a vault, e.g. ``https://my-vault.vault.azure.net``."""
    return f"https://{vault_name}.{dns_suffix}"
