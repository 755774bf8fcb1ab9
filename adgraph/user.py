"""User lookups.

The ``client`` is a users client offering ``list(filter)``, which returns
the matching users (or None) and raises on failure.
"""

from __future__ import annotations

import json
from typing import Any

from adgraph.models import User
from adgraph.response import GraphError


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def user_get_by_object_id(client: Any, object_id: str) -> User:
    """The user with the given object id."""
    filter_ = f"objectId eq '{object_id}'"
    try:
        values = client.list(filter_)
    except Exception as err:
        response = err.response if isinstance(err, GraphError) else None
        raise GraphError(
            f"Error listing Azure AD Users for filter {_q(filter_)}: {err}", response
        ) from err

    if values is None:
        raise LookupError(f"nil values for AD Users matching {_q(filter_)}")
    values = list(values)
    if not values:
        raise LookupError(f"Found no AD Users matching {_q(filter_)}")
    if len(values) > 2:
        raise LookupError(f"Found multiple AD Users matching {_q(filter_)}")

    user = values[0]
    if user.display_name is None:
        raise LookupError(f"nil DisplayName for AD Users matching {_q(filter_)}")
    if user.object_id != object_id:
        raise LookupError(
            f"objectID for AD Users matching {_q(filter_)} does is does not match"
            f"({_q(str(user.object_id))}!={_q(object_id)})"
        )
    return user