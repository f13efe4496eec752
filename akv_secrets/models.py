# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Provider bundles returned by vault clients."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CertificateBundle:
    """Public part of a Key Vault certificate.

    Attributes:
        name: Certificate name
        cer: DER-encoded X.509 certificate bytes
    """

    name: str
    cer: bytes | None


@dataclass(frozen=True)
class KeyBundle:
    """Key Vault key with its JSON Web Key material.

    ``jwk`` maps JWK parameter names (``n``, ``e``, ``d``, ``crv``, ``x``...)
    to raw big-endian bytes; ``kty`` and ``crv`` are strings.
    """

    name: str
    key_id: str | None
    key_type: str | None
    jwk: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SecretBundle:
    """Key Vault secret value and its declared content type."""

    name: str
    value: str | None
    content_type: str | None = None
