from adgraph.models import (
    AppRole,
    Domain,
    OAuth2Permission,
    flatten_app_roles,
    flatten_oauth2_permissions,
)


def test_flatten_app_roles_none():
    assert flatten_app_roles(None) == []


def test_flatten_app_roles_empty():
    assert flatten_app_roles([]) == []


def test_flatten_app_roles_full():
    role = AppRole(
        id="role-id",
        allowed_member_types=["User", "Application"],
        description="desc",
        display_name="Admin",
        is_enabled=True,
        value="admin",
    )
    result = flatten_app_roles([role])
    assert result == [
        {
            "id": "role-id",
            "allowed_member_types": ["User", "Application"],
            "description": "desc",
            "display_name": "Admin",
            "is_enabled": True,
            "value": "admin",
        }
    ]


def test_flatten_app_roles_omits_unset():
    result = flatten_app_roles([AppRole(id="only-id"), AppRole(is_enabled=False)])
    assert result == [{"id": "only-id"}, {"is_enabled": False}]


def test_flatten_app_roles_copies_member_types():
    types = ["User"]
    result = flatten_app_roles([AppRole(allowed_member_types=types)])
    types.append("Application")
    assert result[0]["allowed_member_types"] == ["User"]


def test_flatten_oauth2_permissions_none():
    assert flatten_oauth2_permissions(None) == []


def test_flatten_oauth2_permissions_keys():
    permission = OAuth2Permission(
        admin_consent_description="acd",
        admin_consent_display_name="acn",
        id="perm-id",
        is_enabled=True,
        type="User",
        user_consent_description="ucd",
        user_consent_display_name="ucn",
        value="user_impersonation",
    )
    (result,) = flatten_oauth2_permissions([permission])
    assert set(result) == {
        "admin_consent_description",
        "admin_consent_display_name",
        "id",
        "is_enabled",
        "type",
        "user_consent_description",
        "user_consent_display_name",
        "value",
    }
    assert result["value"] == "user_impersonation"
    assert result["is_enabled"] is True


def test_flatten_oauth2_permissions_omits_unset():
    result = flatten_oauth2_permissions([OAuth2Permission(type="Admin")])
    assert result == [{"type": "Admin"}]


def test_domain_additional_properties_independent():
    first = Domain(name="a")
    second = Domain(name="b")
    first.additional_properties["isInitial"] = True
    assert second.additional_properties == {}