"""Looking up several users at once by user principal names or object ids."""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Sequence
from typing import Any

from adgraph.models import User
from adgraph.response import GraphError
from adgraph.user import user_get_by_object_id


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _by_upn(client: Any, upn: str) -> User:
    try:
        return client.get(upn)
    except Exception as err:
        response = err.response if isinstance(err, GraphError) else None
        raise GraphError(
            f"Error making Read request on AzureAD User with ID {_q(upn)}: {err}", response
        ) from err


def _by_object_id(client: Any, object_id: str) -> User:
    message = f"Error finding Azure AD User with object ID {_q(object_id)}"
    try:
        return user_get_by_object_id(client, object_id)
    except GraphError as err:
        raise GraphError(f"{message}: {err}", err.response) from err
    except LookupError as err:
        raise LookupError(f"{message}: {err}") from err


def read_users(
    client: Any,
    object_ids: Sequence[str] | None = None,
    user_principal_names: Sequence[str] | None = None,
) -> dict[str, Any]:
    """Find users by principal names (preferred) or object ids and return their state.

    The state id is derived from a hash of the principal names joined by ``-``.
    """
    if user_principal_names:
        expected = len(user_principal_names)
        users = [_by_upn(client, upn) for upn in user_principal_names]
    elif object_ids:
        expected = len(object_ids)
        users = [_by_object_id(client, oid) for oid in object_ids]
    else:
        raise ValueError("one of `object_ids` or `user_principal_names` must be supplied")

    if len(users) != expected:
        raise LookupError(
            f"Unexpected number of users returned ({len(users)} != {expected})"
        )

    found_ids: list[str] = []
    found_upns: list[str] = []
    for user in users:
        if user.object_id is None or user.user_principal_name is None:
            raise LookupError(f"User with nil ObjectId or UPN was found: {user!r}")
        found_ids.append(user.object_id)
        found_upns.append(user.user_principal_name)

    digest = hashlib.sha1("-".join(found_upns).encode("utf-8")).digest()
    return {
        "id": "users#" + base64.urlsafe_b64encode(digest).decode("ascii"),
        "object_ids": found_ids,
        "user_principal_names": found_upns,
    }