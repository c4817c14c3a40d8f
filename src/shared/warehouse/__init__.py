"""Async client adapter for AWS Athena query execution."""

from .base import (
    ExecutionStatus,
    QueryParams,
    QueryResultPage,
    WarehouseError,
    QueryValidationError,
    CredentialsError,
    StatusCheckError,
    StatusTransportError,
    StatusServiceError
)
from .config import (
    ATHENA_API_VERSION,
    ENCRYPTION_OPTION,
    MAX_RETRIES,
    ConnectionConfig
)
from .credentials import (
    CredentialsProvider,
    StaticCredentialsProvider,
    EnvironmentCredentialsProvider,
    FileCredentialsProvider,
    SecretsManagerCredentialsProvider,
    create_credentials_provider
)
from .athena import (
    AthenaClientHandle,
    create_athena_client,
    start_query,
    map_query_state,
    query_status,
    query_status_or_sentinel,
    stop_query,
    get_query_results_page,
    get_query_results
)

__all__ = [
    # Models and exceptions
    "ExecutionStatus",
    "QueryParams",
    "QueryResultPage",
    "WarehouseError",
    "QueryValidationError",
    "CredentialsError",
    "StatusCheckError",
    "StatusTransportError",
    "StatusServiceError",

    # Configuration
    "ATHENA_API_VERSION",
    "ENCRYPTION_OPTION",
    "MAX_RETRIES",
    "ConnectionConfig",

    # Credentials
    "CredentialsProvider",
    "StaticCredentialsProvider",
    "EnvironmentCredentialsProvider",
    "FileCredentialsProvider",
    "SecretsManagerCredentialsProvider",
    "create_credentials_provider",

    # Athena operations
    "AthenaClientHandle",
    "create_athena_client",
    "start_query",
    "map_query_state",
    "query_status",
    "query_status_or_sentinel",
    "stop_query",
    "get_query_results_page",
    "get_query_results",
]
