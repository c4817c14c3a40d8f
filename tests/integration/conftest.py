"""
Athena Query Adapter - Integration Test Configuration

Pytest fixtures for integration tests with mocked AWS services.
"""

import pytest
import boto3
from moto import mock_aws

from src.shared.warehouse import ConnectionConfig, create_athena_client


@pytest.fixture(scope='function')
def aws_integration_env(mock_aws_credentials):
    """Set up AWS integration environment with moto"""
    with mock_aws():
        yield {
            's3': boto3.client('s3', region_name='us-east-1'),
            'athena': boto3.client('athena', region_name='us-east-1'),
            'secretsmanager': boto3.client('secretsmanager', region_name='us-east-1'),
        }


@pytest.fixture
def output_bucket(aws_integration_env):
    """Create S3 bucket for query output"""
    bucket_name = 'test-query-output'
    aws_integration_env['s3'].create_bucket(Bucket=bucket_name)
    return bucket_name


@pytest.fixture
def athena_handle(aws_integration_env):
    """Adapter handle pointed at the moto Athena backend"""
    return create_athena_client(
        ConnectionConfig(
            access_key='testing',
            secret_access_key='testing',
            region='us-east-1'
        )
    )
