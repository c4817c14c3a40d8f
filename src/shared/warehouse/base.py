"""Value objects and exceptions for the Athena query adapter."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional


class ExecutionStatus(IntEnum):
    """Normalized execution status.

    A lossy projection of the remote query state: queued and running
    collapse into RUNNING, every terminal non-success state into ERROR.
    """

    ERROR = -1
    RUNNING = 0
    COMPLETED = 1


# Legacy camelCase keys accepted by QueryParams.from_dict
_PARAM_ALIASES = {
    'dbName': 'db_name',
    'sqlStatement': 'sql_statement',
    's3Outputlocation': 's3_output_location',
}


@dataclass(frozen=True)
class QueryParams:
    """Parameters for submitting a query.

    Attributes:
        db_name: Database the statement runs against
        sql_statement: SQL text to execute
        s3_output_location: S3 path where Athena writes the result set
    """

    db_name: str
    sql_statement: str
    s3_output_location: str

    def __post_init__(self):
        missing = [
            name for name in ('db_name', 'sql_statement', 's3_output_location')
            if not isinstance(getattr(self, name), str) or not getattr(self, name).strip()
        ]
        if missing:
            raise QueryValidationError(
                f"Missing required query parameters: {', '.join(missing)}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'QueryParams':
        """Build parameters from a mapping.

        Accepts snake_case keys or the camelCase keys used by older callers
        (dbName, sqlStatement, s3Outputlocation).

        Raises:
            QueryValidationError: If data is not a mapping, or any required
                field is absent or empty
        """
        if not isinstance(data, Mapping):
            raise QueryValidationError(
                f"Query parameters must be a mapping, got {type(data).__name__}"
            )

        values = {}
        for key, value in data.items():
            values[_PARAM_ALIASES.get(key, key)] = value

        return cls(
            db_name=values.get('db_name'),
            sql_statement=values.get('sql_statement'),
            s3_output_location=values.get('s3_output_location'),
        )


@dataclass
class QueryResultPage:
    """One page (or the concatenation of all pages) of a query result set."""

    query_id: str
    columns: List[str] = field(default_factory=list)
    rows: List[Dict[str, Optional[str]]] = field(default_factory=list)
    next_token: Optional[str] = None

    @property
    def row_count(self) -> int:
        return len(self.rows)


class WarehouseError(Exception):
    """Base exception for query adapter errors."""
    pass


class QueryValidationError(WarehouseError, ValueError):
    """Raised when query submission parameters are invalid."""
    pass


class CredentialsError(WarehouseError):
    """Raised when a credentials provider cannot resolve credentials."""
    pass


class StatusCheckError(WarehouseError):
    """Raised when a status check call itself fails.

    Carries the numeric error sentinel in ``code`` and the underlying
    exception in ``detail``.
    """

    code = int(ExecutionStatus.ERROR)

    def __init__(self, execution_id: str, detail: Exception):
        super().__init__(f"Status check failed for {execution_id}: {detail}")
        self.execution_id = execution_id
        self.detail = detail


class StatusTransportError(StatusCheckError):
    """Status check failed before the service answered (network, endpoint)."""
    pass


class StatusServiceError(StatusCheckError):
    """Status check rejected by the service (auth, unknown execution id)."""

    def __init__(self, execution_id: str, detail: Exception, error_code: Optional[str] = None):
        super().__init__(execution_id, detail)
        self.error_code = error_code
