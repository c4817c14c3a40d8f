"""Connection configuration for the Athena query adapter."""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

# Athena API version the client is pinned to
ATHENA_API_VERSION = '2017-05-18'

# Retries for transient transport failures, handled by botocore
MAX_RETRIES = 5

# Result sets are always encrypted with S3-managed keys
ENCRYPTION_OPTION = 'SSE_S3'

DEFAULT_REGION = 'us-east-1'

_CONFIG_ALIASES = {
    'accessKey': 'access_key',
    'accessKeyId': 'access_key',
    'secretAccessKey': 'secret_access_key',
    'sessionToken': 'session_token',
}


@dataclass(frozen=True)
class ConnectionConfig:
    """Credentials and region used to address Athena.

    Attributes:
        access_key: AWS access key id
        secret_access_key: AWS secret access key
        region: AWS region
        session_token: Optional STS session token
    """

    access_key: str
    secret_access_key: str
    region: str
    session_token: Optional[str] = None

    def validate(self) -> bool:
        """Check that the required fields are present.

        Raises:
            ValueError: If a required field is missing or empty
        """
        if not self.access_key:
            raise ValueError("access_key is required")
        if not self.secret_access_key:
            raise ValueError("secret_access_key is required")
        if not self.region:
            raise ValueError("region is required")
        return True

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        masked = (self.access_key or '')[:4]
        return f"ConnectionConfig(access_key='{masked}...', region='{self.region}')"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ConnectionConfig':
        """Build a config from a mapping with snake_case or camelCase keys."""
        values = {}
        for key, value in data.items():
            values[_CONFIG_ALIASES.get(key, key)] = value

        return cls(
            access_key=values.get('access_key'),
            secret_access_key=values.get('secret_access_key'),
            region=values.get('region'),
            session_token=values.get('session_token'),
        )

    @classmethod
    def from_env(cls) -> 'ConnectionConfig':
        """Build a config from environment variables.

        ATHENA_* variables take precedence over the standard AWS_* ones.
        """
        access_key = os.environ.get('ATHENA_ACCESS_KEY_ID') or os.environ.get('AWS_ACCESS_KEY_ID')
        secret_access_key = (
            os.environ.get('ATHENA_SECRET_ACCESS_KEY') or os.environ.get('AWS_SECRET_ACCESS_KEY')
        )
        region = (
            os.environ.get('ATHENA_REGION')
            or os.environ.get('AWS_REGION')
            or os.environ.get('AWS_DEFAULT_REGION', DEFAULT_REGION)
        )

        return cls(
            access_key=access_key,
            secret_access_key=secret_access_key,
            region=region,
            session_token=os.environ.get('AWS_SESSION_TOKEN'),
        )
