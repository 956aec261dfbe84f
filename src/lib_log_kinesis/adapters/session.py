"""AWS session, credential, region, and endpoint resolution on boto3.

Purpose
-------
Turn a :class:`HookConfig` into a live boto3 client for the configured
delivery mode.

Contents
--------
* :func:`resolve_credentials` - environment → static pair → shared file.
* :func:`resolve_region` / :func:`resolve_endpoint` - explicit → env → default.
* :func:`create_session` / :func:`create_client` - boto3 construction.

System Role
-----------
Runs once per hook during composition. Every failure surfaces as
:class:`SessionInitError` so the factory never returns a half-built hook.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import boto3
from botocore.credentials import Credentials, EnvProvider, SharedCredentialProvider
from botocore.exceptions import BotoCoreError, PartialCredentialsError

from lib_log_kinesis.errors import SessionInitError
from lib_log_kinesis.settings import HookConfig, KinesisMode

LOGGER = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
REGION_ENV_VAR = "AWS_REGION"
ENDPOINT_ENV_VAR = "AWS_ENDPOINT"
SHARED_CREDENTIALS_ENV_VAR = "AWS_SHARED_CREDENTIALS_FILE"
PROFILE_ENV_VAR = "AWS_PROFILE"
DEFAULT_SHARED_CREDENTIALS_FILE = "~/.aws/credentials"


@dataclass(frozen=True, slots=True)
class ResolvedCredentials:
    """Credential triple plus the chain step that produced it."""

    access_key: str
    secret_key: str
    token: str | None
    source: str


def _from_env() -> Credentials | None:
    try:
        return EnvProvider().load()
    except PartialCredentialsError:
        LOGGER.debug("Ignoring incomplete AWS credentials in the environment")
        return None


def _from_shared_file(profile: str) -> Credentials | None:
    filename = os.getenv(SHARED_CREDENTIALS_ENV_VAR) or DEFAULT_SHARED_CREDENTIALS_FILE
    profile_name = profile or os.getenv(PROFILE_ENV_VAR) or "default"
    try:
        return SharedCredentialProvider(creds_filename=os.path.expanduser(filename), profile_name=profile_name).load()
    except BotoCoreError as exc:
        raise SessionInitError(f"Unable to read shared credentials for profile {profile_name!r}: {exc}") from exc


def _freeze(credentials: Credentials, source: str) -> ResolvedCredentials:
    frozen = credentials.get_frozen_credentials()
    return ResolvedCredentials(frozen.access_key, frozen.secret_key, frozen.token, source)


def resolve_credentials(config: HookConfig) -> ResolvedCredentials:
    """Walk the credential chain and stop at the first usable step.

    Raises
    ------
    SessionInitError
        When neither the environment, the static pair, nor the shared
        credentials file yields credentials.
    """

    env_credentials = _from_env()
    if env_credentials is not None:
        return _freeze(env_credentials, "environment")

    if config.access_key and config.secret_key:
        return ResolvedCredentials(config.access_key, config.secret_key, None, "static")

    shared = _from_shared_file(config.profile)
    if shared is not None:
        return _freeze(shared, "shared-credentials-file")

    raise SessionInitError("No AWS credentials found in the environment, the hook config, or the shared credentials file")


def resolve_region(config: HookConfig) -> str:
    """Return the explicit region, else ``AWS_REGION``, else ``us-east-1``.

    Examples
    --------
    >>> resolve_region(HookConfig(region='eu-west-1'))
    'eu-west-1'
    """

    if config.region:
        return config.region
    return os.getenv(REGION_ENV_VAR) or DEFAULT_REGION


def resolve_endpoint(config: HookConfig) -> str | None:
    """Return the explicit endpoint, else ``AWS_ENDPOINT``, else ``None``."""

    if config.endpoint:
        return config.endpoint
    return os.getenv(ENDPOINT_ENV_VAR) or None


def create_session(config: HookConfig) -> boto3.session.Session:
    """Build a boto3 session from the resolved credentials and region."""

    credentials = resolve_credentials(config)
    region = resolve_region(config)
    LOGGER.debug("Creating boto3 session region=%s credentials=%s", region, credentials.source)
    try:
        return boto3.session.Session(
            aws_access_key_id=credentials.access_key,
            aws_secret_access_key=credentials.secret_key,
            aws_session_token=credentials.token,
            region_name=region,
        )
    except BotoCoreError as exc:
        raise SessionInitError(f"Unable to create AWS session: {exc}") from exc


def create_client(
    session: boto3.session.Session,
    mode: KinesisMode,
    *,
    endpoint: str | None = None,
    client_config: Any = None,
) -> Any:
    """Create the ``kinesis`` or ``firehose`` client matching ``mode``."""

    kwargs: dict[str, Any] = {}
    if endpoint:
        kwargs["endpoint_url"] = endpoint
    if client_config is not None:
        kwargs["config"] = client_config
    try:
        return session.client(mode.service_name, **kwargs)
    except (BotoCoreError, ValueError) as exc:
        raise SessionInitError(f"Unable to create {mode.service_name} client: {exc}") from exc


__all__ = [
    "DEFAULT_REGION",
    "ENDPOINT_ENV_VAR",
    "REGION_ENV_VAR",
    "ResolvedCredentials",
    "create_client",
    "create_session",
    "resolve_credentials",
    "resolve_endpoint",
    "resolve_region",
]
