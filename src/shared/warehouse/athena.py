"""AWS Athena query adapter.

Thin async wrappers around the Athena API: create a client handle, submit
a query, check its status, stop it and read its results. Each coroutine
issues one blocking boto3 call on the event loop's default executor, so
several calls may be in flight on the same handle at once.
"""

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, ParamValidationError

from .base import (
    ExecutionStatus,
    QueryParams,
    QueryResultPage,
    QueryValidationError,
    StatusCheckError,
    StatusServiceError,
    StatusTransportError,
)
from .config import ATHENA_API_VERSION, ENCRYPTION_OPTION, MAX_RETRIES, ConnectionConfig
from .credentials import (
    CredentialsProvider,
    EnvironmentCredentialsProvider,
    StaticCredentialsProvider,
)

logger = logging.getLogger(__name__)

# Athena caps GetQueryResults at 1000 rows per call
MAX_PAGE_SIZE = 1000

_STATE_MAP = {
    'QUEUED': ExecutionStatus.RUNNING,
    'RUNNING': ExecutionStatus.RUNNING,
    'SUCCEEDED': ExecutionStatus.COMPLETED,
    'FAILED': ExecutionStatus.ERROR,
    'CANCELLED': ExecutionStatus.ERROR,
}


@dataclass(frozen=True)
class AthenaClientHandle:
    """Configured Athena client shared by all query operations.

    Holds no mutable state; boto3 clients are thread-safe, so one handle
    can serve concurrent calls.
    """

    client: Any
    region: str


def create_athena_client(
    connection: Optional[Union[ConnectionConfig, Mapping[str, Any]]] = None,
    credentials_provider: Optional[CredentialsProvider] = None
) -> AthenaClientHandle:
    """Create an Athena client handle.

    No network call is made; bad credentials surface on first use.

    Args:
        connection: Credentials and region to bind the client to
        credentials_provider: Credential source, takes precedence over connection

    Returns:
        AthenaClientHandle bound to the resolved credentials

    Raises:
        CredentialsError: If the provider cannot resolve complete credentials
    """
    if credentials_provider is None:
        if connection is None:
            credentials_provider = EnvironmentCredentialsProvider()
        else:
            if not isinstance(connection, ConnectionConfig):
                connection = ConnectionConfig.from_dict(connection)
            credentials_provider = StaticCredentialsProvider(connection)

    resolved = credentials_provider.resolve()

    client = boto3.client(
        'athena',
        api_version=ATHENA_API_VERSION,
        region_name=resolved.region,
        aws_access_key_id=resolved.access_key,
        aws_secret_access_key=resolved.secret_access_key,
        aws_session_token=resolved.session_token,
        config=Config(retries={'max_attempts': MAX_RETRIES, 'mode': 'standard'})
    )
    logger.debug(f"Created Athena client for region {resolved.region}")

    return AthenaClientHandle(client=client, region=resolved.region)


async def _call(method: Callable[..., Any], **kwargs) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(method, **kwargs))


async def start_query(
    handle: AthenaClientHandle,
    params: Union[QueryParams, Mapping[str, Any]]
) -> str:
    """Submit a query for execution.

    Args:
        handle: Handle from create_athena_client
        params: Database, SQL statement and S3 output location

    Returns:
        Execution id assigned by Athena

    Raises:
        QueryValidationError: If a parameter is missing (no request is sent)
        botocore.exceptions.ClientError: Propagated unchanged from Athena
    """
    if not isinstance(params, QueryParams):
        params = QueryParams.from_dict(params)

    response = await _call(
        handle.client.start_query_execution,
        QueryString=params.sql_statement,
        ResultConfiguration={
            'OutputLocation': params.s3_output_location,
            'EncryptionConfiguration': {'EncryptionOption': ENCRYPTION_OPTION}
        },
        QueryExecutionContext={'Database': params.db_name}
    )

    execution_id = response['QueryExecutionId']
    logger.info(f"Started query {execution_id} on database {params.db_name}")
    return execution_id


def map_query_state(state: Optional[str]) -> ExecutionStatus:
    """Map an Athena query state to an ExecutionStatus.

    Total over all inputs: anything other than QUEUED, RUNNING or
    SUCCEEDED is an error.
    """
    if not isinstance(state, str):
        return ExecutionStatus.ERROR
    return _STATE_MAP.get(state, ExecutionStatus.ERROR)


async def query_status(handle: AthenaClientHandle, execution_id: str) -> ExecutionStatus:
    """Check the current status of a query execution.

    One point-in-time check; call again to poll.

    Raises:
        StatusServiceError: Athena rejected the request (e.g. unknown id)
        StatusTransportError: The request never got an answer
        QueryValidationError: botocore rejected the execution id locally
            (e.g. empty); no request was sent
    """
    logger.debug(f"Checking status of query {execution_id}")
    try:
        response = await _call(handle.client.get_query_execution, QueryExecutionId=execution_id)
    except ParamValidationError as e:
        raise QueryValidationError(f"Invalid execution id {execution_id!r}: {e}") from e
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code')
        logger.warning(f"Status check for {execution_id} rejected: {error_code}")
        raise StatusServiceError(execution_id, e, error_code=error_code) from e
    except BotoCoreError as e:
        logger.warning(f"Status check for {execution_id} failed: {e}")
        raise StatusTransportError(execution_id, e) from e

    state = response.get('QueryExecution', {}).get('Status', {}).get('State')
    return map_query_state(state)


async def query_status_or_sentinel(handle: AthenaClientHandle, execution_id: str) -> ExecutionStatus:
    """Like query_status, but a failed status check yields ExecutionStatus.ERROR.

    For callers that only understand the -1/0/1 sentinel and do not
    need the failure detail.
    """
    try:
        return await query_status(handle, execution_id)
    except StatusCheckError:
        return ExecutionStatus.ERROR


async def stop_query(handle: AthenaClientHandle, execution_id: str) -> Dict[str, Any]:
    """Request cancellation of a query execution.

    Returns:
        The raw StopQueryExecution response
    """
    response = await _call(handle.client.stop_query_execution, QueryExecutionId=execution_id)
    logger.info(f"Requested stop of query {execution_id}")
    return response


def _parse_result_page(
    page: Dict[str, Any],
    query_id: str,
    first_page: bool,
    known_columns: Optional[List[str]] = None
) -> QueryResultPage:
    result_set = page.get('ResultSet', {})
    columns = [
        col.get('Name', '')
        for col in result_set.get('ResultSetMetadata', {}).get('ColumnInfo', [])
    ] or list(known_columns or [])
    values = [
        [cell.get('VarCharValue') for cell in row.get('Data', [])]
        for row in result_set.get('Rows', [])
    ]

    # The first page of a SELECT starts with a header row
    if first_page and values:
        if not columns:
            columns = [value or '' for value in values[0]]
            values = values[1:]
        elif values[0] == columns:
            values = values[1:]

    return QueryResultPage(
        query_id=query_id,
        columns=columns,
        rows=[dict(zip(columns, row)) for row in values],
        next_token=page.get('NextToken')
    )


async def get_query_results_page(
    handle: AthenaClientHandle,
    execution_id: str,
    next_token: Optional[str] = None,
    max_results: Optional[int] = None
) -> QueryResultPage:
    """Fetch one page of a completed query's results.

    Args:
        handle: Handle from create_athena_client
        execution_id: Execution to read
        next_token: Continuation token from a previous page
        max_results: Page size, capped at 1000

    Returns:
        QueryResultPage whose next_token is set when more rows remain
    """
    kwargs: Dict[str, Any] = {'QueryExecutionId': execution_id}
    if next_token:
        kwargs['NextToken'] = next_token
    if max_results:
        kwargs['MaxResults'] = min(max_results, MAX_PAGE_SIZE)

    logger.debug(f"Fetching results page for query {execution_id}")
    page = await _call(handle.client.get_query_results, **kwargs)
    return _parse_result_page(page, execution_id, first_page=not next_token)


async def get_query_results(
    handle: AthenaClientHandle,
    execution_id: str,
    max_rows: Optional[int] = None
) -> QueryResultPage:
    """Fetch all results of a completed query.

    Args:
        handle: Handle from create_athena_client
        execution_id: Execution to read
        max_rows: Stop after this many data rows

    Returns:
        QueryResultPage holding every row, with next_token None
    """

    def collect() -> QueryResultPage:
        columns: List[str] = []
        rows: List[Dict[str, Optional[str]]] = []
        paginator = handle.client.get_paginator('get_query_results')

        for index, page in enumerate(paginator.paginate(QueryExecutionId=execution_id)):
            parsed = _parse_result_page(
                page, execution_id, first_page=index == 0, known_columns=columns
            )
            if not columns:
                columns = parsed.columns
            rows.extend(parsed.rows)
            if max_rows is not None and len(rows) >= max_rows:
                rows = rows[:max_rows]
                break

        return QueryResultPage(query_id=execution_id, columns=columns, rows=rows)

    logger.debug(f"Fetching all results for query {execution_id}")
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, collect)
