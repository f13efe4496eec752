# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Private key recovery and PKCS#8 encoding for certificates."""

import base64
import re
from collections.abc import Mapping
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from cryptography.hazmat.primitives.serialization import pkcs12

from .exceptions import KeyEncodingError

PKCS12_CONTENT_TYPE = "application/x-pkcs12"
PEM_CONTENT_TYPE = "application/x-pem-file"

_PRIVATE_KEY_BLOCK = re.compile(
    rb"-----BEGIN (?P<label>(?:RSA |EC )?)PRIVATE KEY-----.+?-----END (?P=label)PRIVATE KEY-----",
    re.DOTALL,
)

_CURVES = {
    "P-256": ec.SECP256R1,
    "P-256K": ec.SECP256K1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}


def has_private_material(jwk: Mapping[str, Any]) -> bool:
    """Return True if a JSON Web Key carries its private exponent/scalar."""
    return bool(jwk.get("d"))


def _to_int(value: bytes | str) -> int:
    # Key Vault returns raw bytes; JWK documents use unpadded base64url
    if isinstance(value, str):
        value = base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))
    return int.from_bytes(value, byteorder="big")


def private_key_from_jwk(jwk: Mapping[str, Any]) -> PrivateKeyTypes:
    """Rebuild a private key from JSON Web Key parameters.

    RSA keys need ``n``, ``e`` and ``d``; missing primes and CRT values are
    recomputed. EC keys need ``crv`` and ``d``.

    Raises:
        KeyEncodingError: If the key is public-only, malformed or of an
            unsupported type
    """
    if not has_private_material(jwk):
        raise KeyEncodingError("key carries no private material")

    kty = str(jwk.get("kty") or "").upper()
    try:
        if kty.startswith("RSA"):
            n = _to_int(jwk["n"])
            e = _to_int(jwk["e"])
            d = _to_int(jwk["d"])
            if jwk.get("p") and jwk.get("q"):
                p = _to_int(jwk["p"])
                q = _to_int(jwk["q"])
            else:
                p, q = rsa.rsa_recover_prime_factors(n, e, d)
            dmp1 = _to_int(jwk["dp"]) if jwk.get("dp") else rsa.rsa_crt_dmp1(d, p)
            dmq1 = _to_int(jwk["dq"]) if jwk.get("dq") else rsa.rsa_crt_dmq1(d, q)
            iqmp = _to_int(jwk["qi"]) if jwk.get("qi") else rsa.rsa_crt_iqmp(p, q)
            numbers = rsa.RSAPrivateNumbers(
                p=p,
                q=q,
                d=d,
                dmp1=dmp1,
                dmq1=dmq1,
                iqmp=iqmp,
                public_numbers=rsa.RSAPublicNumbers(e=e, n=n),
            )
            return numbers.private_key()

        if kty.startswith("EC"):
            curve = _CURVES.get(str(jwk.get("crv") or ""))
            if curve is None:
                raise KeyEncodingError(f"unsupported EC curve: {jwk.get('crv')}")
            return ec.derive_private_key(_to_int(jwk["d"]), curve())
    except KeyError as e:
        raise KeyEncodingError(f"{kty} key is missing parameter {e}") from e
    except ValueError as e:
        raise KeyEncodingError(f"invalid {kty} key material: {e}") from e

    raise KeyEncodingError(f"unsupported key type: {kty or 'unknown'}")


def private_key_from_secret(value: str, content_type: str | None) -> PrivateKeyTypes:
    """Extract the private key from a certificate's backing secret.

    ``application/x-pkcs12`` secrets hold a base64 PFX without a password;
    anything else is read as a PEM bundle and its first private key block is
    used.

    Raises:
        KeyEncodingError: If no unencrypted private key can be read
    """
    try:
        if (content_type or "").lower() == PKCS12_CONTENT_TYPE:
            key, _, _ = pkcs12.load_key_and_certificates(base64.b64decode(value), None)
            if key is None:
                raise KeyEncodingError("PKCS#12 bundle contains no private key")
            return key

        match = _PRIVATE_KEY_BLOCK.search(value.encode("utf-8"))
        if match is None:
            raise KeyEncodingError("PEM bundle contains no private key")
        return serialization.load_pem_private_key(match.group(0), password=None)
    except (ValueError, TypeError) as e:
        raise KeyEncodingError(f"unreadable private key: {e}") from e


def ensure_matches_certificate(key: PrivateKeyTypes, certificate: x509.Certificate) -> None:
    """Raise KeyEncodingError unless ``key`` belongs to ``certificate``."""
    spki = serialization.PublicFormat.SubjectPublicKeyInfo
    key_public = key.public_key().public_bytes(serialization.Encoding.DER, spki)
    cert_public = certificate.public_key().public_bytes(serialization.Encoding.DER, spki)
    if key_public != cert_public:
        raise KeyEncodingError("private key does not match the certificate public key")


def private_key_to_pem(key: PrivateKeyTypes) -> str:
    """Encode a private key as unencrypted PKCS#8 PEM (``PRIVATE KEY``)."""
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
