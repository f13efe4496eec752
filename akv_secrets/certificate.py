# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""X.509 parsing and PEM armoring."""

from cryptography import x509
from cryptography.hazmat.primitives import serialization

from .exceptions import DecodeError


def parse_certificate(der: bytes | None) -> x509.Certificate:
    """Parse DER-encoded bytes as an X.509 certificate.

    Raises:
        DecodeError: If the bytes are missing or are not a certificate
    """
    if not der:
        raise DecodeError("certificate has no DER content")
    try:
        return x509.load_der_x509_certificate(bytes(der))
    except ValueError as e:
        raise DecodeError(f"invalid X.509 certificate: {e}") from e


def certificate_to_pem(certificate: x509.Certificate) -> str:
    """Wrap a certificate's DER bytes in a ``CERTIFICATE`` PEM block.

    The block ends with a newline and its base64 body decodes to exactly the
    DER bytes of the certificate.
    """
    return certificate.public_bytes(serialization.Encoding.PEM).decode("ascii")
