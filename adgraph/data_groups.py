"""Looking up several groups at once by object ids or display names."""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Sequence
from typing import Any

from adgraph.group import group_get_by_display_name
from adgraph.models import ADGroup
from adgraph.response import GraphError


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _by_name(client: Any, name: str) -> ADGroup:
    message = f"Error finding Azure AD Group with display name {_q(name)}"
    try:
        return group_get_by_display_name(client, name)
    except GraphError as err:
        raise GraphError(f"{message}: {err}", err.response) from err
    except LookupError as err:
        raise LookupError(f"{message}: {err}") from err


def _by_object_id(client: Any, object_id: str) -> ADGroup:
    try:
        return client.get(object_id)
    except Exception as err:
        response = err.response if isinstance(err, GraphError) else None
        raise GraphError(
            f"Error making Read request on AzureAD Group with ID {_q(object_id)}: {err}",
            response,
        ) from err


def read_groups(
    client: Any,
    object_ids: Sequence[str] | None = None,
    names: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Find groups by display names (preferred) or object ids and return their state.

    The state id is derived from a hash of the display names joined by ``-``.
    """
    if names:
        expected = len(names)
        groups = [_by_name(client, name) for name in names]
    elif object_ids:
        expected = len(object_ids)
        groups = [_by_object_id(client, oid) for oid in object_ids]
    else:
        raise ValueError("one of `object_ids` or `names` must be supplied")

    if len(groups) != expected:
        raise LookupError(
            f"Unexpected number of groups returned ({len(groups)} != {expected})"
        )

    found_ids: list[str] = []
    found_names: list[str] = []
    for group in groups:
        if group.object_id is None or group.display_name is None:
            raise LookupError(f"User with nil ObjectId or UPN was found: {group!r}")
        found_ids.append(group.object_id)
        found_names.append(group.display_name)

    digest = hashlib.sha1("-".join(found_names).encode("utf-8")).digest()
    return {
        "id": "groups#" + base64.urlsafe_b64encode(digest).decode("ascii"),
        "object_ids": found_ids,
        "names": found_names,
    }