"""Unit tests for RedisKeySchema.

Test coverage includes:
    1. Key generation without a prefix
    2. Key generation with a prefix
    3. Prefix validation
"""

import pytest

from shorturl.dao.redis import RedisKeySchema


# -------------------------------
# 1. Keys without prefix
# -------------------------------


def test_keys_without_prefix():
    keys = RedisKeySchema()

    assert keys.mapping_id_key('abc123') == 'short_urls:id:abc123'
    assert keys.mapping_url_key('https://example.com/a?b=c') == 'short_urls:url:https://example.com/a?b=c'
    assert keys.schema_key() == 'short_urls:schema'


# -------------------------------
# 2. Keys with prefix
# -------------------------------


@pytest.mark.parametrize('prefix', ['shorturl:dev', 'shorturl:prod', 'x'])
def test_keys_with_prefix(prefix):
    keys = RedisKeySchema(prefix=prefix)

    assert keys.mapping_id_key('abc123') == f'{prefix}:short_urls:id:abc123'
    assert keys.mapping_url_key('https://example.com') == f'{prefix}:short_urls:url:https://example.com'
    assert keys.schema_key() == f'{prefix}:short_urls:schema'


def test_id_and_url_keys_never_overlap():
    """A short id that looks like a url must not share a key with that url."""
    keys = RedisKeySchema(prefix='shorturl:test')
    assert keys.mapping_id_key('https://example.com') != keys.mapping_url_key('https://example.com')


# -------------------------------
# 3. Prefix validation
# -------------------------------


@pytest.mark.parametrize('prefix', [1, 12.5, ['shorturl'], {'app': 'shorturl'}])
def test_invalid_prefix_type_raises_error(prefix):
    with pytest.raises(TypeError, match='Prefix must be of type string'):
        RedisKeySchema(prefix=prefix)
