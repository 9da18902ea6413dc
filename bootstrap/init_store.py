#!/usr/bin/env python3
"""
Initialize the short URL mapping store.

Connects to the Redis data store and writes the key layout (schema) marker
the service expects. Safe to run repeatedly against the same location.

CLI usage:
    # Use STORAGE_LOCATION / APP_NAME / APP_ENV from the environment
    $ python -m bootstrap.init_store

    # Explicit location and key prefix
    $ python -m bootstrap.init_store \
        --location redis://redis.example:6379/0 \
        --prefix shorturl:dev

Args:
    --location (str): Redis URL of the mapping store (default: $STORAGE_LOCATION
                      or redis://localhost:6379/0).
    --prefix (str): Optional key namespace (default: <APP_NAME>:<APP_ENV> when
                    APP_NAME is set).

Returns:
    Exit code 0 on success, 1 when the store can't be initialized.
"""

from __future__ import annotations

import argparse
import sys

from shorturl.dao.redis import MappingRedisDAO
from shorturl.dao.exceptions import StorageInitError
from shorturl.utils.config import ShortenerConfig


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Steps:
        - Parse CLI arguments (defaults come from the environment)
        - Initialize the mapping store at the requested location
        - Print a concise status line
    """
    defaults = ShortenerConfig.from_environment()

    parser = argparse.ArgumentParser(
        prog='init_store.py',
        description='Create or verify the short URL mapping store',
    )
    parser.add_argument(
        '--location',
        default=defaults.storage_location,
        help=f'Redis URL of the mapping store (default: {defaults.storage_location})',
    )
    parser.add_argument(
        '--prefix',
        default=defaults.prefix,
        help='Key namespace, e.g. shorturl:dev (default: <APP_NAME>:<APP_ENV>)',
    )
    args = parser.parse_args(argv)

    try:
        MappingRedisDAO.initialize(args.location, prefix=args.prefix)
    except StorageInitError as e:
        print(f'[error] {e}', file=sys.stderr)
        return 1

    print(f'[ok] mapping store ready (prefix: {args.prefix or "<none>"})')
    return 0


if __name__ == '__main__':
    sys.exit(main())
