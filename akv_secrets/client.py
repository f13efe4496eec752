# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Vault clients and the factory that binds them to a credential."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from akv_logging import create_logger

from .auth import AuthContext, Authenticator
from .exceptions import AuthError, ObjectNotFoundError, ProviderFetchError
from .models import CertificateBundle, KeyBundle, SecretBundle

logger = create_logger(logger_type="stdout", level="INFO", name="akv_secrets.client")

T = TypeVar("T")

# JWK members copied from a Key Vault key; anything absent is left out
_JWK_FIELDS = ("kty", "crv", "n", "e", "d", "p", "q", "dp", "dq", "qi", "x", "y")


class VaultClient(ABC):
    """Reads certificates, keys and secrets from a vault.

    Every call takes the vault endpoint, the object name and a version; an
    empty version asks for the latest one. Clients are used for a single
    resolution and then closed.
    """

    @abstractmethod
    def get_certificate(self, endpoint: str, name: str, version: str) -> CertificateBundle:
        """Fetch the public part of a certificate.

        Raises:
            ObjectNotFoundError: If the certificate does not exist
            ProviderFetchError: If the call fails
        """
        pass

    @abstractmethod
    def get_key(self, endpoint: str, name: str, version: str) -> KeyBundle:
        """Fetch a key and its JSON Web Key material.

        Raises:
            ObjectNotFoundError: If the key does not exist
            ProviderFetchError: If the call fails
        """
        pass

    @abstractmethod
    def get_secret(self, endpoint: str, name: str, version: str) -> SecretBundle:
        """Fetch a secret value.

        Raises:
            ObjectNotFoundError: If the secret does not exist
            ProviderFetchError: If the call fails
        """
        pass

    def close(self) -> None:
        """Release any resources held by this client."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class AzureKeyVaultClient(VaultClient):
    """Vault client backed by the Azure Key Vault SDK.

    SDK clients are created on first use for each endpoint and share the
    ``AuthContext`` of the resolution that built this client.

    Attributes:
        credential: AuthContext used by every SDK client
        verify_challenge_resource: Passed to the SDK clients; when True the
            authentication challenge must name a resource on the vault domain
    """

    def __init__(self, credential: AuthContext, verify_challenge_resource: bool = True):
        """Initialize the client.

        Raises:
            AuthError: If the Azure Key Vault SDK is not installed
        """
        try:
            from azure.keyvault.certificates import CertificateClient
            from azure.keyvault.keys import KeyClient
            from azure.keyvault.secrets import SecretClient
        except ImportError as e:
            raise AuthError(
                "Azure SDK dependencies for Azure Key Vault are not installed. "
                "Install with: pip install azure-keyvault-certificates "
                "azure-keyvault-keys azure-keyvault-secrets"
            ) from e

        self.credential = credential
        self.verify_challenge_resource = verify_challenge_resource
        self._client_classes = {
            "certificate": CertificateClient,
            "key": KeyClient,
            "secret": SecretClient,
        }
        self._clients: dict[tuple[str, str], Any] = {}

    def _sdk_client(self, kind: str, endpoint: str) -> Any:
        client = self._clients.get((kind, endpoint))
        if client is None:
            try:
                client = self._client_classes[kind](
                    vault_url=endpoint,
                    credential=self.credential,
                    verify_challenge_resource=self.verify_challenge_resource,
                )
            except ValueError as e:
                raise ProviderFetchError(f"Invalid vault endpoint '{endpoint}': {e}", kind) from e
            self._clients[(kind, endpoint)] = client
        return client

    @staticmethod
    def _call(kind: str, name: str, endpoint: str, func: Callable[[], T]) -> T:
        """Run one SDK call, translating its failures."""
        from azure.core.exceptions import AzureError, ResourceNotFoundError

        try:
            return func()
        except ResourceNotFoundError as e:
            raise ObjectNotFoundError(f"{kind} not found: {name} in {endpoint}", kind, name) from e
        except AzureError as e:
            raise ProviderFetchError(f"Failed to get {kind} '{name}' from {endpoint}: {e}", kind, name) from e
        except Exception as e:
            # Wrap anything else the transport raises
            raise ProviderFetchError(f"Failed to get {kind} '{name}' from {endpoint}: {e}", kind, name) from e

    def get_certificate(self, endpoint: str, name: str, version: str) -> CertificateBundle:
        client = self._sdk_client("certificate", endpoint)

        def fetch():
            if version:
                return client.get_certificate_version(name, version)
            return client.get_certificate(name)

        certificate = self._call("certificate", name, endpoint, fetch)
        cer = certificate.cer
        return CertificateBundle(name=name, cer=bytes(cer) if cer is not None else None)

    def get_key(self, endpoint: str, name: str, version: str) -> KeyBundle:
        client = self._sdk_client("key", endpoint)
        key = self._call("key", name, endpoint, lambda: client.get_key(name, version=version or None))

        jwk: dict[str, Any] = {}
        material = key.key
        for field_name in _JWK_FIELDS:
            value = getattr(material, field_name, None) if material is not None else None
            if value is None:
                continue
            # kty and crv arrive as str enums
            jwk[field_name] = getattr(value, "value", value)

        key_type = key.key_type
        return KeyBundle(
            name=name,
            key_id=key.id,
            key_type=getattr(key_type, "value", key_type),
            jwk=jwk,
        )

    def get_secret(self, endpoint: str, name: str, version: str) -> SecretBundle:
        client = self._sdk_client("secret", endpoint)
        secret = self._call("secret", name, endpoint, lambda: client.get_secret(name, version=version or None))

        properties = getattr(secret, "properties", None)
        return SecretBundle(
            name=name,
            value=secret.value,
            content_type=getattr(properties, "content_type", None),
        )

    def close(self) -> None:
        for client in self._clients.values():
            close_method = getattr(client, "close", None)
            if callable(close_method):
                try:
                    close_method()
                except (AttributeError, TypeError, RuntimeError) as e:
                    logger.warning(f"Unexpected error closing Key Vault client: {e}")
        self._clients.clear()


class VaultClientFactory:
    """Builds a fresh vault client per resolution.

    Each call to ``new_client`` authorizes again; neither credentials nor
    clients are kept between calls.

    Example:
        >>> factory = VaultClientFactory(EnvironmentAuthenticator())
        >>> with factory.new_client("https://vault.azure.net") as client:
        ...     bundle = client.get_secret("https://my-vault.vault.azure.net", "api-key", "")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        client_cls: Callable[..., VaultClient] = AzureKeyVaultClient,
        **client_kwargs: Any,
    ):
        """Initialize the factory.

        Args:
            authenticator: Source of credentials
            client_cls: VaultClient implementation, called with the AuthContext
            **client_kwargs: Extra keyword arguments for client_cls
        """
        self.authenticator = authenticator
        self.client_cls = client_cls
        self.client_kwargs = client_kwargs

    def new_client(self, audience: str) -> VaultClient:
        """Authorize for ``audience`` and return a client bound to the credential.

        Raises:
            AuthError: If authorization or client construction fails
        """
        context = self.authenticator.authorize(audience)
        try:
            return self.client_cls(context, **self.client_kwargs)
        except AuthError:
            raise
        except (TypeError, ValueError) as e:
            raise AuthError(f"Failed to construct vault client: {e}") from e
