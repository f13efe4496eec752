# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Tests for factories and end-to-end resolution over the mocked Azure SDK."""

import os
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from azure.keyvault.keys import JsonWebKey, KeyType
from cryptography.hazmat.primitives import serialization

from akv_secrets import (
    AzureKeyVaultClient,
    EnvConfigProvider,
    EnvironmentAuthenticator,
    ResolverConfig,
    SecretDescriptor,
    SecretResolver,
    StaticTokenAuthenticator,
    VaultConfigError,
    create_authenticator,
    create_secret_resolver,
    resolve_secret,
)


class TestCreateAuthenticator:
    """Tests for create_authenticator."""

    def test_default_is_environment(self):
        assert isinstance(create_authenticator(), EnvironmentAuthenticator)

    def test_static(self):
        authenticator = create_authenticator("Static", token="abc")

        assert isinstance(authenticator, StaticTokenAuthenticator)
        assert authenticator.authorize("https://vault.azure.net").token == "abc"

    def test_unknown_type(self):
        with pytest.raises(VaultConfigError, match="Unknown authenticator type: kerberos"):
            create_authenticator("kerberos")

    def test_bad_arguments(self):
        with pytest.raises(VaultConfigError, match="Invalid static authenticator arguments"):
            create_authenticator("static")


class TestCreateSecretResolver:
    """Tests for create_secret_resolver."""

    def test_wires_configuration(self, silent_logger):
        config = ResolverConfig(dns_suffix="vault.azure.cn", verify_challenge_resource=False)
        authenticator = StaticTokenAuthenticator("abc")

        resolver = create_secret_resolver(config=config, authenticator=authenticator, logger=silent_logger)

        assert isinstance(resolver, SecretResolver)
        assert resolver.config is config
        assert resolver.logger is silent_logger
        assert resolver.client_factory.authenticator is authenticator
        assert resolver.client_factory.client_cls is AzureKeyVaultClient
        assert resolver.client_factory.client_kwargs == {"verify_challenge_resource": False}

    def test_reads_environment(self):
        with patch.dict(os.environ, {"AZURE_KEYVAULT_AUTH": "environment"}, clear=True):
            resolver = create_secret_resolver()

        assert resolver.config == ResolverConfig()
        assert isinstance(resolver.client_factory.authenticator, EnvironmentAuthenticator)

    def test_static_authenticator_from_configuration(self):
        config = ResolverConfig.from_provider(
            EnvConfigProvider({"AZURE_KEYVAULT_AUTH": "static", "AZURE_KEYVAULT_TOKEN": "eyJ0eXAi"})
        )

        resolver = create_secret_resolver(config=config)

        authenticator = resolver.client_factory.authenticator
        assert isinstance(authenticator, StaticTokenAuthenticator)
        assert authenticator.authorize(config.resource_audience).token == "eyJ0eXAi"


class TestEndToEnd:
    """Resolution through AzureKeyVaultClient with the SDK clients patched."""

    @pytest.fixture
    def sdk(self, mocker):
        return SimpleNamespace(
            certificate=mocker.patch("azure.keyvault.certificates.CertificateClient").return_value,
            key=mocker.patch("azure.keyvault.keys.KeyClient").return_value,
            secret=mocker.patch("azure.keyvault.secrets.SecretClient").return_value,
        )

    def test_secret(self, sdk, silent_logger):
        sdk.secret.get_secret.return_value = SimpleNamespace(value="s3cr3t!", properties=None)

        value = resolve_secret(
            SecretDescriptor("my-vault", "db-password", "secret"),
            config=ResolverConfig(),
            authenticator=StaticTokenAuthenticator("abc"),
            logger=silent_logger,
        )

        assert value == "s3cr3t!"
        sdk.secret.get_secret.assert_called_once_with("db-password", version=None)
        sdk.certificate.get_certificate.assert_not_called()

    def test_certificate_with_pem_backing_secret(self, sdk, silent_logger, certificate, certificate_der, rsa_key_pem, rsa_public_jwk):
        cert_pem = certificate.public_bytes(serialization.Encoding.PEM).decode()
        sdk.certificate.get_certificate.return_value = SimpleNamespace(cer=bytearray(certificate_der))
        sdk.key.get_key.return_value = SimpleNamespace(
            id="https://my-vault.vault.azure.net/keys/tls-cert/abc",
            key_type=KeyType.rsa,
            key=JsonWebKey(kty=KeyType.rsa, n=rsa_public_jwk["n"], e=rsa_public_jwk["e"]),
        )
        sdk.secret.get_secret.return_value = SimpleNamespace(
            value=rsa_key_pem + cert_pem,
            properties=SimpleNamespace(content_type="application/x-pem-file"),
        )

        value = resolve_secret(
            SecretDescriptor("my-vault", "tls-cert", "Certificate"),
            config=ResolverConfig(),
            authenticator=StaticTokenAuthenticator("abc"),
            logger=silent_logger,
        )

        assert value == rsa_key_pem.rstrip("\n") + "\n" + cert_pem
        sdk.certificate.get_certificate.assert_called_once_with("tls-cert")
        sdk.key.get_key.assert_called_once_with("tls-cert", version=None)
        sdk.secret.get_secret.assert_called_once_with("tls-cert", version=None)
        sdk.certificate.close.assert_called_once()
