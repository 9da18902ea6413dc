"""Unit tests for handle_redis_error decorator.

This test suite verifies that the decorator properly translates Redis
failures and preserves the original method's behavior.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Error handling
       - Ensures Redis connection and timeout errors become StorageError.
       - Ensures other Redis errors become StorageError with the original message.
       - Ensures non-Redis exceptions pass through untouched.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import pytest
import redis
from unittest.mock import MagicMock

from shorturl.dao.redis.helpers import handle_redis_error
from shorturl.dao.exceptions import ConflictError, StorageError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }
        self.error = error

    @handle_redis_error
    def run(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    """Ensure the wrapped function executes normally when no error occurs."""
    assert DummyDAO().run() == 'OK'


# -------------------------------
# 2. Error handling
# -------------------------------


@pytest.mark.parametrize(
    'error',
    [redis.exceptions.ConnectionError('Cannot connect'), redis.exceptions.TimeoutError('Timed out')],
)
def test_decorator_transforms_redis_connectivity_errors(error):
    """Ensure Redis ConnectionError/TimeoutError are re-raised as StorageError."""
    with pytest.raises(StorageError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        DummyDAO(error).run()

    assert exc_info.value.__cause__ is error


def test_decorator_transforms_other_redis_errors():
    """Ensure generic Redis errors are re-raised as StorageError with the original message."""
    with pytest.raises(StorageError, match='Redis at localhost:6379/0 failed: NOSCRIPT'):
        DummyDAO(redis.exceptions.ResponseError('NOSCRIPT No matching script')).run()


def test_decorator_lets_dao_errors_through():
    """Ensure DAO errors raised by the method itself are not converted."""
    with pytest.raises(ConflictError):
        DummyDAO(ConflictError('taken')).run()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
