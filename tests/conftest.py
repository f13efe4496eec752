# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Shared fixtures for akv-secrets tests."""

import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from akv_logging import SilentLogger
from akv_secrets import (
    CertificateBundle,
    KeyBundle,
    ObjectNotFoundError,
    ResolverConfig,
    SecretBundle,
    SecretResolver,
    StaticTokenAuthenticator,
    VaultClient,
    VaultClientFactory,
)


def make_certificate(key, common_name: str = "test.example.com") -> x509.Certificate:
    """Build a self-signed certificate for ``key``."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(key, hashes.SHA256())
    )


def _int_bytes(value: int) -> bytes:
    return value.to_bytes((value.bit_length() + 7) // 8, byteorder="big")


class FakeVaultClient(VaultClient):
    """In-memory VaultClient that records every call in order."""

    def __init__(self, certificates=None, keys=None, secrets=None, failures=None):
        self.certificates = certificates or {}
        self.keys = keys or {}
        self.secrets = secrets or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, str, str, str]] = []
        self.closed = False

    def _lookup(self, kind, store, endpoint, name, version):
        self.calls.append((kind, endpoint, name, version))
        if kind in self.failures:
            raise self.failures[kind]
        if name not in store:
            raise ObjectNotFoundError(f"{kind} not found: {name}", kind, name)
        return store[name]

    def get_certificate(self, endpoint, name, version):
        return self._lookup("certificate", self.certificates, endpoint, name, version)

    def get_key(self, endpoint, name, version):
        return self._lookup("key", self.keys, endpoint, name, version)

    def get_secret(self, endpoint, name, version):
        return self._lookup("secret", self.secrets, endpoint, name, version)

    def close(self):
        self.closed = True

    @property
    def kinds_called(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def certificate(rsa_key):
    return make_certificate(rsa_key)


@pytest.fixture(scope="session")
def certificate_der(certificate):
    return certificate.public_bytes(serialization.Encoding.DER)


@pytest.fixture(scope="session")
def rsa_private_jwk(rsa_key):
    """Full RSA JSON Web Key as Key Vault returns it for an exportable key."""
    numbers = rsa_key.private_numbers()
    return {
        "kty": "RSA",
        "n": _int_bytes(numbers.public_numbers.n),
        "e": _int_bytes(numbers.public_numbers.e),
        "d": _int_bytes(numbers.d),
        "p": _int_bytes(numbers.p),
        "q": _int_bytes(numbers.q),
        "dp": _int_bytes(numbers.dmp1),
        "dq": _int_bytes(numbers.dmq1),
        "qi": _int_bytes(numbers.iqmp),
    }


@pytest.fixture(scope="session")
def rsa_public_jwk(rsa_private_jwk):
    """Public-only RSA JSON Web Key, the usual Key Vault response."""
    return {name: rsa_private_jwk[name] for name in ("kty", "n", "e")}


@pytest.fixture(scope="session")
def rsa_key_pem(rsa_key):
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def silent_logger():
    return SilentLogger()


@pytest.fixture
def fake_client(certificate_der, rsa_private_jwk):
    """Vault holding one certificate ``tls-cert`` and one secret ``db-password``."""
    return FakeVaultClient(
        certificates={"tls-cert": CertificateBundle(name="tls-cert", cer=certificate_der)},
        keys={
            "tls-cert": KeyBundle(
                name="tls-cert",
                key_id="https://my-vault.vault.azure.net/keys/tls-cert/abc",
                key_type="RSA",
                jwk=rsa_private_jwk,
            )
        },
        secrets={"db-password": SecretBundle(name="db-password", value="s3cr3t!")},
    )


@pytest.fixture
def make_resolver(silent_logger):
    """Build a resolver whose factory hands out ``client`` after authorizing."""

    def _make(client, authenticator=None, config=None):
        factory = VaultClientFactory(
            authenticator or StaticTokenAuthenticator("test-token"),
            client_cls=lambda context: client,
        )
        return SecretResolver(factory, config=config or ResolverConfig(), logger=silent_logger)

    return _make
