"""Short id generation and URL validation utilities

This module provides the helpers used by ShorteningService to mint candidate
short ids and to reject input that can't be shortened.

Functions:
    generate_short_id(length=6, alphabet=SHORT_ID_ALPHABET):
        Draw a random, fixed-length, URL-safe short id.
    validate_url(long_url):
        Ensure a URL is a non-empty, well-formed absolute URL.

Example:
    >>> from shorturl.utils import generate_short_id, validate_url
    >>> generate_short_id()
    'q7f-mO'
    >>> validate_url('https://example.com/a')
    'https://example.com/a'
"""

import secrets
from urllib.parse import urlsplit

from shorturl.constants import SHORT_ID_ALPHABET, MAX_URL_LENGTH
from shorturl.exceptions import InvalidInputError


def generate_short_id(length: int = 6, alphabet: str = SHORT_ID_ALPHABET) -> str:
    """Generate a random short id suitable for use as a URL slug.

    Each character is drawn uniformly and independently from `alphabet` using
    the operating system's CSPRNG, so the candidate space is len(alphabet)**length
    (64**6 ~ 6.8e10 for the defaults) and ids are not guessable from each other.

    Args:
        length (int, optional):
            Number of characters in the short id. Defaults to 6.

        alphabet (str, optional):
            Characters to draw from. Defaults to the 64-symbol URL-safe alphabet
            [A-Za-z0-9-_].

    Returns:
        str: A random short id of exactly `length` characters.

    NOTE:
        - Collisions are possible and become likely once the number of stored
          mappings approaches sqrt(len(alphabet)**length). The caller is
          responsible for retrying with a new candidate.
    """
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')

    return ''.join(secrets.choice(alphabet) for _ in range(length))


def validate_url(long_url: str) -> str:
    """Ensure `long_url` is a non-empty, well-formed absolute URL.

    Well-formed means: a string of at most MAX_URL_LENGTH characters, without
    whitespace, with both a scheme and a network location (e.g. 'https://host/...').
    This is minimal well-formedness only; reachability and scheme allow-lists are
    out of scope.

    Args:
        long_url (str): The URL to validate.

    Returns:
        str: The same URL, unchanged.

    Raises:
        InvalidInputError: If the URL is empty or malformed.

    Example:
        >>> validate_url('not a url')
        Traceback (most recent call last):
            ...
        shorturl.exceptions.InvalidInputError: Invalid URL 'not a url' (URL must not contain whitespace).
    """
    if not isinstance(long_url, str) or not long_url:
        raise InvalidInputError('Invalid URL (URL is required).')
    if len(long_url) > MAX_URL_LENGTH:
        raise InvalidInputError(f'Invalid URL (URL is longer than {MAX_URL_LENGTH} characters).')
    if any(character.isspace() for character in long_url):
        raise InvalidInputError(f"Invalid URL '{long_url}' (URL must not contain whitespace).")

    try:
        components = urlsplit(long_url)
        # accessing the port validates it (e.g. 'http://host:abc' raises ValueError)
        components.port
    except ValueError as e:
        raise InvalidInputError(f"Invalid URL '{long_url}' ({e}).") from e

    if not components.scheme or not components.netloc:
        raise InvalidInputError(f"Invalid URL '{long_url}' (URL must be absolute, e.g. 'https://example.com/').")
    return long_url
