# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Bearer credentials for Key Vault access."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from azure.core.credentials import AccessToken

from akv_logging import create_logger

from .exceptions import AuthError

logger = create_logger(logger_type="stdout", level="INFO", name="akv_secrets.auth")


def scope_for(audience: str) -> str:
    """Return the OAuth scope for a resource audience."""
    return f"{audience.rstrip('/')}/.default"


@dataclass(frozen=True)
class AuthContext:
    """Bearer token issued for one resource audience.

    Satisfies the azure-core ``TokenCredential`` protocol, so it can be handed
    straight to SDK clients. Whatever scopes the client asks for, it gets the
    token this context was issued with; it never refreshes.

    Attributes:
        token: Bearer token
        expires_on: Expiry as seconds since the epoch
        audience: Resource audience the token was issued for
    """

    token: str = field(repr=False)
    expires_on: int
    audience: str

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        return AccessToken(self.token, self.expires_on)


class Authenticator(ABC):
    """Issues bearer credentials for a resource audience."""

    @abstractmethod
    def authorize(self, audience: str) -> AuthContext:
        """Obtain a credential scoped to ``audience``.

        Args:
            audience: Resource identifier, e.g. "https://vault.azure.net"

        Returns:
            AuthContext holding the bearer token

        Raises:
            AuthError: If no credential can be obtained
        """
        pass


class EnvironmentAuthenticator(Authenticator):
    """Authenticator that uses the identity of the ambient environment.

    ``DefaultAzureCredential`` tries, in order, environment variables
    (AZURE_CLIENT_ID, AZURE_CLIENT_SECRET, AZURE_TENANT_ID), workload identity,
    managed identity and developer logins such as the Azure CLI.

    Example:
        >>> authenticator = EnvironmentAuthenticator(managed_identity_client_id="...")
        >>> context = authenticator.authorize("https://vault.azure.net")
    """

    def __init__(self, credential: Any = None, **credential_kwargs: Any):
        """Initialize the authenticator.

        Args:
            credential: Optional azure-core TokenCredential to use instead of
                DefaultAzureCredential. It is not closed by this class.
            **credential_kwargs: Keyword arguments for DefaultAzureCredential
        """
        self._credential = credential
        self._credential_kwargs = credential_kwargs

    def authorize(self, audience: str) -> AuthContext:
        try:
            from azure.core.exceptions import AzureError
            from azure.identity import DefaultAzureCredential
        except ImportError as e:
            raise AuthError(
                "Azure SDK dependencies for authentication are not installed. "
                "Install with: pip install azure-identity"
            ) from e

        credential = self._credential
        owns_credential = credential is None
        try:
            if owns_credential:
                credential = DefaultAzureCredential(**self._credential_kwargs)
            access_token = credential.get_token(scope_for(audience))
        except (AzureError, ValueError) as e:
            raise AuthError(f"Failed to obtain a token for {audience}: {e}") from e
        except Exception as e:
            # Credential chains surface transport failures as arbitrary exceptions
            raise AuthError(f"Failed to obtain a token for {audience}: {e}") from e
        finally:
            if owns_credential and credential is not None:
                _close_quietly(credential)

        logger.debug("Obtained token from ambient identity", audience=audience)
        return AuthContext(
            token=access_token.token,
            expires_on=access_token.expires_on,
            audience=audience,
        )


class StaticTokenAuthenticator(Authenticator):
    """Authenticator that hands out a token it was given.

    Useful in tests and for callers that already hold a bearer token.
    """

    def __init__(self, token: str, expires_on: int | None = None):
        self._token = token
        self._expires_on = expires_on

    def authorize(self, audience: str) -> AuthContext:
        if not self._token:
            raise AuthError(f"No static token configured for {audience}")
        expires_on = self._expires_on if self._expires_on is not None else int(time.time()) + 3600
        return AuthContext(token=self._token, expires_on=expires_on, audience=audience)


def _close_quietly(resource: Any) -> None:
    close_method = getattr(resource, "close", None)
    if callable(close_method):
        try:
            close_method()
        except (AttributeError, TypeError, RuntimeError) as e:
            logger.warning(f"Unexpected error closing credential: {e}")
