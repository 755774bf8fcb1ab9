"""Group lookups and membership helpers.

The ``client`` passed to these functions is a groups client offering
``list(filter)``, ``get_group_members(group_id)``, ``list_owners(group_id)``,
``add_member(group_id, url)``, ``add_owner(group_id, url)`` and a
``tenant_id`` attribute. Failures of those calls are raised as exceptions.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from adgraph.models import ADGroup, ServicePrincipal, User
from adgraph.response import GraphError

log = logging.getLogger(__name__)

GRAPH_ENDPOINT = "https://graph.windows.net"


def _q(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _failure(message: str, err: BaseException) -> GraphError:
    response = err.response if isinstance(err, GraphError) else None
    return GraphError(message, response)


def _directory_object_url(tenant_id: str, object_id: str) -> str:
    return f"{GRAPH_ENDPOINT}/{tenant_id}/directoryObjects/{object_id}"


def group_get_by_display_name(client: Any, display_name: str) -> ADGroup:
    """The group whose display name is exactly ``display_name``."""
    filter_ = f"displayName eq '{display_name}'"
    try:
        values = client.list(filter_)
    except Exception as err:
        raise _failure(
            f"Error listing Azure AD Groups for filter {_q(filter_)}: {err}", err
        ) from err

    if values is None:
        raise LookupError(f"nil values for AD Groups matching {_q(filter_)}")
    values = list(values)
    if not values:
        raise LookupError(f"Found no AD Groups matching {_q(filter_)}")
    if len(values) > 2:
        raise LookupError(f"Found multiple AD Groups matching {_q(filter_)}")

    group = values[0]
    if group.display_name is None:
        raise LookupError(f"nil DisplayName for AD Groups matching {_q(filter_)}")
    if group.display_name != display_name:
        raise LookupError(
            f"displayname for AD Groups matching {_q(filter_)} does is does not match"
            f"({_q(group.display_name)}!={_q(display_name)})"
        )
    return group


def directory_objects_to_ids(objects: Iterable[Any]) -> list[str]:
    """Object ids of the users, groups and service principals among ``objects``."""
    ids: list[str] = []
    iterator = iter(objects)
    while True:
        try:
            obj = next(iterator)
        except StopIteration:
            return ids
        except Exception as err:
            raise _failure(f"Error during pagination of directory objects: {err}", err) from err
        if isinstance(obj, (User, ADGroup, ServicePrincipal)):
            ids.append(obj.object_id)


def group_all_members(client: Any, group_id: str) -> list[str]:
    """Object ids of every member of a group."""
    try:
        members = client.get_group_members(group_id)
    except Exception as err:
        raise _failure(
            f"Error listing existing group members from Azure AD Group with ID {_q(group_id)}: {err}",
            err,
        ) from err
    try:
        ids = directory_objects_to_ids(members)
    except GraphError as err:
        raise _failure(
            "Error getting objects IDs of group members for Azure AD Group with ID "
            f"{_q(group_id)}: {err}",
            err,
        ) from err
    log.debug("%d members in Azure AD group with ID: %r", len(ids), group_id)
    return ids


def group_add_member(client: Any, group_id: str, member: str) -> None:
    """Add one directory object to a group."""
    url = _directory_object_url(client.tenant_id, member)
    log.debug("Adding member with id %r to Azure AD group with id %r", member, group_id)
    try:
        client.add_member(group_id, url)
    except Exception as err:
        raise _failure(
            f"Error adding group member {_q(member)} to Azure AD Group with ID {_q(group_id)}: {err}",
            err,
        ) from err


def group_add_members(client: Any, group_id: str, members: Iterable[str]) -> None:
    """Add directory objects to a group in order, stopping at the first failure."""
    for member in members:
        try:
            group_add_member(client, group_id, member)
        except GraphError as err:
            raise _failure(
                f"Error while adding members to Azure AD Group with ID {_q(group_id)}: {err}", err
            ) from err


def group_all_owners(client: Any, group_id: str) -> list[str]:
    """Object ids of every owner of a group."""
    try:
        owners = client.list_owners(group_id)
    except Exception as err:
        raise _failure(
            f"Error listing existing group owners from Azure AD Group with ID {_q(group_id)}: {err}",
            err,
        ) from err
    try:
        ids = directory_objects_to_ids(owners)
    except GraphError as err:
        raise _failure(
            "Error getting objects IDs of group owners for Azure AD Group with ID "
            f"{_q(group_id)}: {err}",
            err,
        ) from err
    log.debug("%d owners in Azure AD group with ID: %r", len(ids), group_id)
    return ids


def group_add_owner(client: Any, group_id: str, owner: str) -> None:
    """Add one directory object as an owner of a group."""
    url = _directory_object_url(client.tenant_id, owner)
    log.debug("Adding owner with id %r to Azure AD group with id %r", owner, group_id)
    try:
        client.add_owner(group_id, url)
    except Exception as err:
        raise _failure(
            f"Error adding group owner {_q(owner)} to Azure AD Group with ID {_q(group_id)}: {err}",
            err,
        ) from err


def group_add_owners(client: Any, group_id: str, owners: Iterable[str]) -> None:
    """Add owners to a group in order, stopping at the first failure."""
    for owner in owners:
        try:
            group_add_owner(client, group_id, owner)
        except GraphError as err:
            raise _failure(
                f"Error while adding owners to Azure AD Group with ID {_q(group_id)}: {err}", err
            ) from err