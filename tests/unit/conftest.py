"""
Athena Query Adapter - Unit Test Configuration

Pytest fixtures specific to unit tests.
"""

import pytest
from unittest.mock import MagicMock

from src.shared.warehouse.athena import AthenaClientHandle


@pytest.fixture
def mock_athena():
    """Mock boto3 Athena client"""
    client = MagicMock()
    client.start_query_execution.return_value = {'QueryExecutionId': 'query-123'}
    client.get_query_execution.return_value = {
        'QueryExecution': {
            'QueryExecutionId': 'query-123',
            'Status': {'State': 'RUNNING'}
        }
    }
    client.stop_query_execution.return_value = {
        'ResponseMetadata': {'HTTPStatusCode': 200, 'RequestId': 'req-1'}
    }
    return client


@pytest.fixture
def handle(mock_athena):
    """Client handle wrapping the mock Athena client"""
    return AthenaClientHandle(client=mock_athena, region='us-east-1')
