"""Directory objects returned by the graph API and their flattened forms."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class AppRole:
    id: str | None = None
    allowed_member_types: list[str] | None = None
    description: str | None = None
    display_name: str | None = None
    is_enabled: bool | None = None
    value: str | None = None


@dataclass
class OAuth2Permission:
    admin_consent_description: str | None = None
    admin_consent_display_name: str | None = None
    id: str | None = None
    is_enabled: bool | None = None
    type: str | None = None
    user_consent_description: str | None = None
    user_consent_display_name: str | None = None
    value: str | None = None


@dataclass
class ResourceAccess:
    id: str | None = None
    type: str | None = None


@dataclass
class RequiredResourceAccess:
    resource_app_id: str | None = None
    resource_access: list[ResourceAccess] | None = None


@dataclass
class PasswordCredential:
    key_id: str | None = None
    value: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass
class Application:
    object_id: str | None = None
    app_id: str | None = None
    display_name: str | None = None
    homepage: str | None = None
    identifier_uris: list[str] | None = None
    reply_urls: list[str] | None = None
    available_to_other_tenants: bool | None = None
    oauth2_allow_implicit_flow: bool | None = None
    group_membership_claims: str | None = None
    public_client: bool | None = None
    app_roles: list[AppRole] | None = None
    required_resource_access: list[RequiredResourceAccess] | None = None
    oauth2_permissions: list[OAuth2Permission] | None = None


@dataclass
class Domain:
    name: str | None = None
    authentication_type: str | None = None
    is_default: bool | None = None
    is_verified: bool | None = None
    additional_properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class ADGroup:
    object_id: str | None = None
    display_name: str | None = None
    mail_nickname: str | None = None


@dataclass
class User:
    object_id: str | None = None
    user_principal_name: str | None = None
    display_name: str | None = None
    account_enabled: bool | None = None
    mail: str | None = None
    mail_nickname: str | None = None


@dataclass
class ServicePrincipal:
    object_id: str | None = None
    app_id: str | None = None
    display_name: str | None = None
    app_roles: list[AppRole] | None = None
    oauth2_permissions: list[OAuth2Permission] | None = None


def _present(pairs: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in pairs.items() if value is not None}


def flatten_app_roles(roles: list[AppRole] | None) -> list[dict[str, Any]]:
    """Turn app roles into dictionaries holding only the fields that are set."""
    if roles is None:
        return []
    return [
        _present(
            {
                "id": role.id,
                "allowed_member_types": (
                    list(role.allowed_member_types)
                    if role.allowed_member_types is not None
                    else None
                ),
                "description": role.description,
                "display_name": role.display_name,
                "is_enabled": role.is_enabled,
                "value": role.value,
            }
        )
        for role in roles
    ]


def flatten_oauth2_permissions(
    permissions: list[OAuth2Permission] | None,
) -> list[dict[str, Any]]:
    """Turn OAuth2 permissions into dictionaries holding only the fields that are set."""
    if permissions is None:
        return []
    return [
        _present(
            {
                "admin_consent_description": p.admin_consent_description,
                "admin_consent_display_name": p.admin_consent_display_name,
                "id": p.id,
                "is_enabled": p.is_enabled,
                "type": p.type,
                "user_consent_description": p.user_consent_description,
                "user_consent_display_name": p.user_consent_display_name,
                "value": p.value,
            }
        )
        for p in permissions
    ]