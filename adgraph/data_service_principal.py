"""Looking up a service principal by object id, display name or application id."""

from __future__ import annotations

import json
from typing import Any

from adgraph.models import (
    ServicePrincipal,
    flatten_app_roles,
    flatten_oauth2_permissions,
)
from adgraph.response import GraphError, Response, response_was_not_found


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _response_of(err: BaseException) -> Response | None:
    return err.response if isinstance(err, GraphError) else None


def _list(client: Any, filter_: str) -> list[ServicePrincipal]:
    try:
        values = client.list(filter_)
    except Exception as err:
        raise GraphError(
            f"Error listing Service Principals: {err}", _response_of(err)
        ) from err
    return [] if values is None else list(values)


def read_service_principal(
    client: Any,
    object_id: str | None = None,
    display_name: str | None = None,
    application_id: str | None = None,
) -> dict[str, Any]:
    """Find a service principal and return its state.

    ``client`` offers ``get(object_id)`` and ``list(filter)`` and raises on
    failure. The first non-empty of ``object_id`` and ``display_name`` is
    used; otherwise the lookup is by ``application_id``.
    """
    sp: ServicePrincipal | None
    if object_id:
        try:
            sp = client.get(object_id)
        except Exception as err:
            response = _response_of(err)
            if response_was_not_found(response):
                raise LookupError(
                    f"Service Principal with Object ID {_q(object_id)} was not found!"
                ) from err
            raise GraphError(
                f"Error retrieving Service Principal ID {_q(object_id)}: {err}", response
            ) from err
    elif display_name:
        candidates = _list(client, f"displayName eq '{display_name}'")
        sp = next(
            (c for c in candidates if c.display_name is not None and c.display_name == display_name),
            None,
        )
        if sp is None:
            raise LookupError(
                f"A Service Principal with the Display Name {_q(display_name)} was not found"
            )
    else:
        application_id = application_id or ""
        candidates = _list(client, f"appId eq '{application_id}'")
        sp = next(
            (c for c in candidates if c.app_id is not None and c.app_id == application_id),
            None,
        )
        if sp is None:
            raise LookupError(
                f"A Service Principal for Application ID {_q(application_id)} was not found"
            )

    if sp.object_id is None:
        raise LookupError("Service Principal objectId is nil")

    return {
        "id": sp.object_id,
        "application_id": sp.app_id,
        "display_name": sp.display_name,
        "object_id": sp.object_id,
        "app_roles": flatten_app_roles(sp.app_roles),
        "oauth2_permissions": flatten_oauth2_permissions(sp.oauth2_permissions),
    }