"""Listing the domains of a tenant with optional filters."""

from __future__ import annotations

import logging
from typing import Any

from adgraph.models import Domain
from adgraph.response import GraphError

log = logging.getLogger(__name__)

UNDEFINED_AUTHENTICATION = "undefined"


def _is_initial(domain: Domain) -> bool:
    value = domain.additional_properties.get("isInitial")
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"isInitial of domain {domain.name!r} is not a boolean: {value!r}")
    return value


def flatten_domains(
    domains: list[Domain] | None,
    include_unverified: bool = False,
    only_default: bool = False,
    only_initial: bool = False,
) -> list[dict[str, Any]]:
    """Turn domains into dictionaries, keeping those that pass the filters."""
    if domains is None:
        return []

    result = []
    for domain in domains:
        if domain.name is None:
            log.debug("Domain Name was nil - skipping")
            continue

        name = domain.name
        authentication_type = (
            domain.authentication_type
            if domain.authentication_type is not None
            else UNDEFINED_AUTHENTICATION
        )
        is_default = bool(domain.is_default)
        is_initial = _is_initial(domain)
        is_verified = bool(domain.is_verified)

        if only_default and not is_default:
            log.debug("Skipping %r since the filter requires the default domain", name)
            continue
        if only_initial and not is_initial:
            log.debug("Skipping %r since the filter requires the initial domain", name)
            continue
        if not include_unverified and not is_verified:
            log.debug("Skipping %r since the filter requires verified domains", name)
            continue

        result.append(
            {
                "authentication_type": authentication_type,
                "domain_name": name,
                "is_default": is_default,
                "is_initial": is_initial,
                "is_verified": is_verified,
            }
        )
    return result


def read_domains(
    client: Any,
    tenant_id: str,
    include_unverified: bool = False,
    only_default: bool = False,
    only_initial: bool = False,
) -> dict[str, Any]:
    """List the tenant's domains through ``client.list(filter)`` and filter them."""
    try:
        values = client.list("")
    except Exception as err:
        response = err.response if isinstance(err, GraphError) else None
        raise GraphError(f"Error listing Azure AD Domains: {err}", response) from err

    domains = flatten_domains(values, include_unverified, only_default, only_initial)
    if not domains:
        raise LookupError("Error: No domains were returned based on those filters")

    return {"id": "domains-" + tenant_id, "domains": domains}