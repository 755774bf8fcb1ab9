"""Password credentials of applications and service principals."""

from __future__ import annotations

import re
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from adgraph.models import PasswordCredential
from adgraph.replication import (
    REPLICATION_CONTINUOUS_TARGETS,
    REPLICATION_MIN_TIMEOUT,
    REPLICATION_TIMEOUT,
    StateChangeConf,
    replication_error,
)
from adgraph.response import GraphError, response_was_not_found

_DURATION_UNITS = {
    "ns": Decimal("0.000000001"),
    "us": Decimal("0.000001"),
    "µs": Decimal("0.000001"),
    "μs": Decimal("0.000001"),
    "ms": Decimal("0.001"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}
_DURATION_COMPONENT = re.compile(r"(\d*(?:\.\d*)?)(ns|us|µs|μs|ms|s|m|h)")

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})"
)


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"-1.5h"`` or ``"300ms"``."""
    invalid = ValueError(f"time: invalid duration {text!r}")
    body = text
    negative = body.startswith("-")
    if body[:1] in ("+", "-"):
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise invalid

    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _DURATION_COMPONENT.match(body, pos)
        if match is None or not any(ch.isdigit() for ch in match.group(1)):
            raise invalid
        total += Decimal(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    microseconds = int(total * 1_000_000)
    return timedelta(microseconds=-microseconds if negative else microseconds)


def _parse_rfc3339(text: str, field: str) -> datetime:
    match = _RFC3339.fullmatch(text)
    if match is None:
        raise ValueError(f"`{field}` is not a valid RFC3339 time: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * offset)
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tz
        )
    except ValueError as err:
        raise ValueError(f"`{field}` is not a valid RFC3339 time: {text!r}") from err


def password_credential_for_resource(
    value: str,
    end_date: str | None = None,
    end_date_relative: str | None = None,
    key_id: str | None = None,
    start_date: str | None = None,
) -> PasswordCredential:
    """Build a password credential from resource settings.

    ``end_date`` (RFC3339) wins over ``end_date_relative`` (a duration from
    now); one of them is required. A missing ``key_id`` is generated.
    """
    if not key_id:
        key_id = str(uuid.uuid4())

    if end_date:
        end = _parse_rfc3339(end_date, "end_date")
    elif end_date_relative:
        try:
            duration = parse_duration(end_date_relative)
        except ValueError as err:
            raise ValueError(
                f"unable to parse `end_date_relative` ({end_date_relative}) as a duration"
            ) from err
        end = datetime.now(timezone.utc) + duration
    else:
        raise ValueError("one of `end_date` or `end_date_relative` must be specified")

    credential = PasswordCredential(key_id=key_id, value=value, end_date=end)
    if start_date:
        credential.start_date = _parse_rfc3339(start_date, "start_date")
    return credential


def find_by_key_id(
    credentials: Iterable[PasswordCredential] | None, key_id: str
) -> PasswordCredential | None:
    """The credential with the given key id, or None."""
    if credentials is None:
        return None
    return next((c for c in credentials if c.key_id is not None and c.key_id == key_id), None)


def add_credential(
    existing: Iterable[PasswordCredential] | None,
    credential: PasswordCredential,
    error_on_duplicate: bool,
) -> list[PasswordCredential]:
    """A new list of the existing credentials with ``credential`` appended."""
    current = [] if existing is None else list(existing)
    if error_on_duplicate and any(
        c.key_id is not None and c.key_id == credential.key_id for c in current
    ):
        raise ValueError("credential already exists found")
    return [*current, credential]


def remove_by_key_id(
    existing: Iterable[PasswordCredential] | None, key_id: str
) -> list[PasswordCredential]:
    """A new list without the given key id; credentials with no key id are dropped too."""
    if existing is None:
        return []
    return [c for c in existing if c.key_id is not None and c.key_id != key_id]


def wait_for_password_credential_replication(
    key_id: str, fetch: Callable[[], list[PasswordCredential] | None]
) -> list[PasswordCredential] | None:
    """Poll ``fetch`` until the credential with ``key_id`` is seen ten times running."""

    def refresh():
        try:
            credentials = fetch()
        except GraphError as err:
            if response_was_not_found(err.response):
                return err, "404"
            raise replication_error(err) from err
        if find_by_key_id(credentials, key_id) is None:
            return credentials, "NotFound"
        return credentials, "Found"

    return StateChangeConf(
        refresh=refresh,
        pending=("404", "BadCast", "NotFound"),
        target=("Found",),
        timeout=REPLICATION_TIMEOUT,
        min_timeout=REPLICATION_MIN_TIMEOUT,
        continuous_target_occurence=REPLICATION_CONTINUOUS_TARGETS,
    ).wait_for_state()