"""Looking up a user by user principal name or object id."""

from __future__ import annotations

import json
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


def read_user(
    client: Any, object_id: str | None = None, user_principal_name: str | None = None
) -> dict[str, Any]:
    """Find a user and return its state.

    ``client`` offers ``get(upn)`` and ``list(filter)`` and raises on failure.
    A non-empty ``user_principal_name`` takes precedence over ``object_id``.
    """
    if user_principal_name:
        user = _by_upn(client, user_principal_name)
    elif object_id:
        user = _by_object_id(client, object_id)
    else:
        raise ValueError("one of `object_id` or `user_principal_name` must be supplied")

    if user.object_id is None:
        raise LookupError("Azure AD User objectId is nil")

    return {
        "id": user.object_id,
        "object_id": user.object_id,
        "user_principal_name": user.user_principal_name,
        "account_enabled": user.account_enabled,
        "display_name": user.display_name,
        "mail": user.mail,
        "mail_nickname": user.mail_nickname,
    }