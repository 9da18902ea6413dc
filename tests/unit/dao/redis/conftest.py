from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def insert_or_get_script() -> MagicMock:
    """Mock the registered insert_or_get Lua script."""
    script = MagicMock(name='insert_or_get_script')
    script.return_value = ['created', 'abc123']
    return script


@pytest.fixture
def redis_client(insert_or_get_script: MagicMock) -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.exists.return_value = False
    client.get.return_value = None
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.register_script.return_value = insert_or_get_script
    return client
