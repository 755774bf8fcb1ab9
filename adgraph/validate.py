"""Validators for identifiers, names, e-mail addresses and URLs.

Each validator takes the value and the name of the field it belongs to,
returns the value when it is acceptable and raises ``ValidationError``
otherwise.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable
from urllib.parse import SplitResult, urlsplit

UUID_REGEXP = re.compile(
    r"\A[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-4[a-fA-F0-9]{3}-[8|9|aA|bB][a-fA-F0-9]{3}-[a-fA-F0-9]{12}\Z"
)

_EMAIL_REGEXP = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

_HEX32 = re.compile(r"[0-9a-fA-F]{32}")

_UUID_LENGTH = 36
_UUID_HYPHENS = (8, 13, 18, 23)

Validator = Callable[[object, str], str]


class ValidationError(ValueError):
    """A field value that failed validation."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(message)
        self.key = key
        self.message = message


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def parse_uuid(value: str) -> bytes:
    """Parse a hyphenated UUID string into its 16 raw bytes."""
    if len(value) != _UUID_LENGTH:
        raise ValueError("uuid string is wrong length")
    if any(value[pos] != "-" for pos in _UUID_HYPHENS):
        raise ValueError("uuid is improperly formatted")
    hex_text = value[0:8] + value[9:13] + value[14:18] + value[19:23] + value[24:36]
    if not _HEX32.fullmatch(hex_text):
        raise ValueError("uuid contains invalid hex characters")
    return bytes.fromhex(hex_text)


def _require_string(value: object, key: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(key, f"expected type of {_q(key)} to be string")
    return value


def no_empty_strings(value: object, key: str) -> str:
    """Reject strings that are empty or only whitespace."""
    text = _require_string(value, key)
    if not text.strip():
        raise ValidationError(key, f"{_q(key)} must not be empty")
    return text


def string_is_email_address(value: object, key: str) -> str:
    """Accept only strings in e-mail address format."""
    text = _require_string(value, key)
    if not _EMAIL_REGEXP.fullmatch(text):
        raise ValidationError(key, f"{_q(key)} must be in email address format")
    return text


def _split_url(text: str) -> SplitResult:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
        raise ValueError("invalid control character in URL")
    return urlsplit(text)


def url_with_scheme(valid_schemes: Iterable[str]) -> Validator:
    """Build a validator for URLs with a host and one of the given schemes."""
    schemes = tuple(valid_schemes)

    def validator(value: object, key: str) -> str:
        text = _require_string(value, key)
        if text == "":
            raise ValidationError(key, f"expected {_q(key)} url to not be empty")
        try:
            parts = _split_url(text)
        except ValueError as err:
            raise ValidationError(
                key, f"{_q(key)} url is in an invalid format: {_q(text)} ({err})"
            ) from err
        host = parts.netloc.rpartition("@")[2]
        if not host:
            raise ValidationError(key, f"{_q(key)} url has no host: {_q(text)}")
        if parts.scheme in schemes:
            return text
        raise ValidationError(
            key,
            f"expected {_q(key)} url {_q(text)} to have a schema of: {_q(','.join(schemes))}",
        )

    return validator


_https = url_with_scheme(["https"])
_http_or_https = url_with_scheme(["http", "https"])
_app_uri = url_with_scheme(["http", "https", "api", "urn", "ms-appx"])


def url_is_https(value: object, key: str) -> str:
    """Accept only https URLs with a host."""
    return _https(value, key)


def url_is_http_or_https(value: object, key: str) -> str:
    """Accept http or https URLs with a host."""
    return _http_or_https(value, key)


def url_is_app_uri(value: object, key: str) -> str:
    """Accept URLs usable as application identifier URIs."""
    return _app_uri(value, key)


def validate_uuid(value: object, key: str) -> str:
    """Accept only strings that parse as a UUID."""
    text = _require_string(value, key)
    try:
        parse_uuid(text)
    except ValueError as err:
        raise ValidationError(
            key, f"{_q(key)} isn't a valid UUID ({_q(text)}): {err}"
        ) from err
    return text