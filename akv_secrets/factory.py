# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Factories for authenticators and resolvers."""

from typing import Any, cast

from akv_logging import Logger

from .auth import Authenticator, EnvironmentAuthenticator, StaticTokenAuthenticator
from .client import AzureKeyVaultClient, VaultClientFactory
from .config import ResolverConfig
from .descriptor import SecretDescriptor
from .exceptions import VaultConfigError
from .resolver import SecretResolver


def create_authenticator(authenticator_type: str | None = None, **kwargs: Any) -> Authenticator:
    """Create an authenticator.

    Args:
        authenticator_type: "environment" (default) or "static"
        **kwargs: Authenticator-specific configuration

    Returns:
        Authenticator instance

    Raises:
        VaultConfigError: If authenticator_type is unknown

    Example:
        >>> authenticator = create_authenticator("static", token="eyJ0eXAi...")
    """
    authenticators: dict[str, type] = {
        "environment": EnvironmentAuthenticator,
        "static": StaticTokenAuthenticator,
    }

    authenticator_type = (authenticator_type or "environment").lower()
    if authenticator_type not in authenticators:
        raise VaultConfigError(
            f"Unknown authenticator type: {authenticator_type}. "
            f"Available: {', '.join(authenticators.keys())}"
        )

    try:
        return cast(Authenticator, authenticators[authenticator_type](**kwargs))
    except TypeError as e:
        raise VaultConfigError(f"Invalid {authenticator_type} authenticator arguments: {e}") from e


def create_secret_resolver(
    config: ResolverConfig | None = None,
    authenticator: Authenticator | None = None,
    logger: Logger | None = None,
) -> SecretResolver:
    """Wire configuration, authenticator and client factory into a resolver.

    Args:
        config: Resolver settings; read from the environment when omitted
        authenticator: Credential source; built from ``config.authenticator_type``
            (and ``config.token`` for "static") when omitted
        logger: Logger for resolution events

    Returns:
        SecretResolver backed by Azure Key Vault
    """
    config = config or ResolverConfig.from_provider()
    if authenticator is None:
        authenticator_kwargs: dict[str, Any] = {}
        if config.authenticator_type == "static":
            authenticator_kwargs["token"] = config.token
        authenticator = create_authenticator(config.authenticator_type, **authenticator_kwargs)
    client_factory = VaultClientFactory(
        authenticator,
        client_cls=AzureKeyVaultClient,
        verify_challenge_resource=config.verify_challenge_resource,
    )
    return SecretResolver(client_factory, config=config, logger=logger)


def resolve_secret(descriptor: SecretDescriptor, **kwargs: Any) -> str:
    """Resolve one descriptor with a resolver built by ``create_secret_resolver``."""
    return create_secret_resolver(**kwargs).resolve(descriptor)
