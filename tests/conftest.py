"""
Athena Query Adapter - Root Test Configuration

Pytest fixtures and configuration for all tests.
"""

import sys
from pathlib import Path

# Add repository root and src directory to Python path for imports
ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import pytest
import boto3
from moto import mock_aws
from typing import Any, Dict


@pytest.fixture
def mock_aws_credentials(monkeypatch):
    """Mock AWS credentials for testing"""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def clean_athena_env(monkeypatch):
    """Remove credential-related environment variables"""
    for name in (
        'ATHENA_ACCESS_KEY_ID',
        'ATHENA_SECRET_ACCESS_KEY',
        'ATHENA_REGION',
        'ATHENA_CREDENTIALS_SOURCE',
        'ATHENA_CREDENTIALS_FILE',
        'ATHENA_CREDENTIALS_SECRET_ID',
        'AWS_ACCESS_KEY_ID',
        'AWS_SECRET_ACCESS_KEY',
        'AWS_SESSION_TOKEN',
        'AWS_REGION',
        'AWS_DEFAULT_REGION',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def athena_client(mock_aws_credentials):
    """Mock Athena client"""
    with mock_aws():
        yield boto3.client('athena', region_name='us-east-1')


@pytest.fixture
def secrets_client(mock_aws_credentials):
    """Mock Secrets Manager client"""
    with mock_aws():
        yield boto3.client('secretsmanager', region_name='us-east-1')


@pytest.fixture
def sample_query_params() -> Dict[str, Any]:
    """Query submission parameters in the legacy camelCase shape"""
    return {
        'dbName': 'analytics',
        'sqlStatement': 'SELECT 1',
        's3Outputlocation': 's3://bucket/out/',
    }


@pytest.fixture
def sample_result_page() -> Dict[str, Any]:
    """First page of a GetQueryResults response"""
    return {
        'ResultSet': {
            'Rows': [
                {'Data': [{'VarCharValue': 'eventname'}, {'VarCharValue': 'sourceipaddress'}]},
                {'Data': [{'VarCharValue': 'ConsoleLogin'}, {'VarCharValue': '1.2.3.4'}]},
                {'Data': [{'VarCharValue': 'AssumeRole'}, {}]},
            ],
            'ResultSetMetadata': {
                'ColumnInfo': [
                    {'Name': 'eventname', 'Type': 'varchar'},
                    {'Name': 'sourceipaddress', 'Type': 'varchar'},
                ]
            }
        },
        'NextToken': 'token-2'
    }
