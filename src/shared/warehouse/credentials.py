"""Credentials providers for the Athena query adapter.

A provider is anything with a ``resolve()`` method returning a
ConnectionConfig. The adapter never reads credentials from a fixed
location on its own; callers choose a provider (or pass a config
directly) when creating a client.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol, Union

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import CredentialsError
from .config import DEFAULT_REGION, ConnectionConfig

logger = logging.getLogger(__name__)


class CredentialsProvider(Protocol):
    """Protocol for credential sources."""

    def resolve(self) -> ConnectionConfig:
        """Resolve the connection configuration.

        Returns:
            ConnectionConfig with credentials and region

        Raises:
            CredentialsError: If credentials cannot be resolved
        """
        ...


def _checked(config: ConnectionConfig, source: str) -> ConnectionConfig:
    try:
        config.validate()
    except ValueError as e:
        raise CredentialsError(f"Incomplete credentials from {source}: {e}") from e
    return config


class StaticCredentialsProvider:
    """Returns a caller-supplied configuration unchanged."""

    def __init__(self, connection: ConnectionConfig):
        self.connection = connection

    def resolve(self) -> ConnectionConfig:
        return _checked(self.connection, "static configuration")


class EnvironmentCredentialsProvider:
    """Reads credentials from environment variables on every resolve."""

    def resolve(self) -> ConnectionConfig:
        return _checked(ConnectionConfig.from_env(), "environment")


class FileCredentialsProvider:
    """Reads credentials from a JSON file.

    The file holds an object such as::

        {"accessKey": "...", "secretAccessKey": "...", "region": "us-east-1"}

    snake_case keys are accepted as well.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def resolve(self) -> ConnectionConfig:
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read credentials file {self.path}: {e}")
            raise CredentialsError(f"Could not read credentials file {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise CredentialsError(f"Credentials file {self.path} must contain a JSON object")

        return _checked(ConnectionConfig.from_dict(data), str(self.path))


class SecretsManagerCredentialsProvider:
    """Reads credentials from an AWS Secrets Manager secret.

    The secret's SecretString must be a JSON object in the same shape as
    the credentials file. The region of the secret itself is used as the
    Athena region when the secret does not specify one.
    """

    def __init__(
        self,
        secret_id: str,
        region: str = DEFAULT_REGION,
        secrets_client: Optional[Any] = None
    ):
        """Initialize Secrets Manager provider.

        Args:
            secret_id: Secret name or ARN
            region: Region of the secret
            secrets_client: Boto3 Secrets Manager client
        """
        self.secret_id = secret_id
        self.region = region
        self.secrets_client = secrets_client or boto3.client('secretsmanager', region_name=region)

    def resolve(self) -> ConnectionConfig:
        try:
            response = self.secrets_client.get_secret_value(SecretId=self.secret_id)
        except (ClientError, BotoCoreError) as e:
            logger.warning(f"Error retrieving secret {self.secret_id}: {e}")
            raise CredentialsError(f"Could not retrieve secret {self.secret_id}: {e}") from e

        try:
            data = json.loads(response['SecretString'])
        except (KeyError, TypeError, json.JSONDecodeError) as e:
            raise CredentialsError(f"Secret {self.secret_id} is not a JSON credentials object") from e

        if not isinstance(data, dict):
            raise CredentialsError(f"Secret {self.secret_id} is not a JSON credentials object")

        data.setdefault('region', self.region)
        return _checked(ConnectionConfig.from_dict(data), f"secret {self.secret_id}")


def create_credentials_provider(source: Optional[str] = None, **kwargs) -> CredentialsProvider:
    """
    Create a credentials provider.

    Args:
        source: Provider type (env, file, secrets)
        **kwargs: Provider-specific configuration (path, secret_id, region)

    Returns:
        CredentialsProvider instance

    Raises:
        ValueError: If the source is unsupported or its settings are missing
    """
    if source is None:
        source = os.environ.get('ATHENA_CREDENTIALS_SOURCE', 'env').lower()

    if source == 'env':
        return EnvironmentCredentialsProvider()
    elif source == 'file':
        path = kwargs.get('path') or os.environ.get('ATHENA_CREDENTIALS_FILE')
        if not path:
            raise ValueError("ATHENA_CREDENTIALS_FILE must be specified")
        return FileCredentialsProvider(path)
    elif source == 'secrets':
        secret_id = kwargs.get('secret_id') or os.environ.get('ATHENA_CREDENTIALS_SECRET_ID')
        region = kwargs.get('region') or os.environ.get('AWS_REGION', DEFAULT_REGION)
        if not secret_id:
            raise ValueError("ATHENA_CREDENTIALS_SECRET_ID must be specified")
        return SecretsManagerCredentialsProvider(
            secret_id=secret_id,
            region=region,
            secrets_client=kwargs.get('secrets_client')
        )
    else:
        raise ValueError(
            f"Unsupported credentials source: {source}. "
            f"Must be 'env', 'file', or 'secrets'"
        )
