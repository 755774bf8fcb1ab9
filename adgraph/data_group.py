"""Looking up a group by object id or display name, with its members and owners."""

from __future__ import annotations

import json
from typing import Any

from adgraph.group import group_all_members, group_all_owners, group_get_by_display_name
from adgraph.models import ADGroup
from adgraph.response import GraphError, response_was_not_found


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _get_by_object_id(client: Any, object_id: str) -> ADGroup:
    try:
        return client.get(object_id)
    except Exception as err:
        response = err.response if isinstance(err, GraphError) else None
        if response_was_not_found(response):
            raise LookupError(
                f"Error: AzureAD Group with ID {_q(object_id)} was not found"
            ) from err
        raise GraphError(
            f"Error making Read request on AzureAD Group with ID {_q(object_id)}: {err}",
            response,
        ) from err


def _get_by_name(client: Any, name: str) -> ADGroup:
    message = f"Error finding Azure AD Group with display name {_q(name)}"
    try:
        return group_get_by_display_name(client, name)
    except GraphError as err:
        raise GraphError(f"{message}: {err}", err.response) from err
    except LookupError as err:
        raise LookupError(f"{message}: {err}") from err


def read_group(
    client: Any, object_id: str | None = None, name: str | None = None
) -> dict[str, Any]:
    """Find a group and return its state, including member and owner ids.

    ``client`` is a groups client offering ``get(object_id)``, ``list(filter)``,
    ``get_group_members(group_id)`` and ``list_owners(group_id)``. A non-empty
    ``object_id`` takes precedence over ``name``.
    """
    if object_id:
        group = _get_by_object_id(client, object_id)
    elif name:
        group = _get_by_name(client, name)
    else:
        raise ValueError("one of `object_id` or `name` must be supplied")

    if group.object_id is None:
        raise LookupError("Group objectId is nil")

    group_id = group.object_id
    members = group_all_members(client, group_id)
    owners = group_all_owners(client, group_id)

    return {
        "id": group_id,
        "object_id": group_id,
        "name": group.display_name,
        "members": members,
        "owners": owners,
    }