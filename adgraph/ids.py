"""Composite resource identifiers built from directory object UUIDs."""

from __future__ import annotations

from dataclasses import dataclass

from adgraph.validate import parse_uuid

MEMBER_TYPE = "member"


@dataclass(frozen=True)
class ObjectSubResourceId:
    """An identifier of the form ``{objectId}/{type}/{subId}``."""

    object_id: str
    type: str
    sub_id: str

    def __str__(self) -> str:
        return f"{self.object_id}/{self.type}/{self.sub_id}"


class GroupMemberId(ObjectSubResourceId):
    """The identifier of a group membership: ``{groupId}/member/{memberId}``."""

    @property
    def group_id(self) -> str:
        return self.object_id

    @property
    def member_id(self) -> str:
        return self.sub_id


@dataclass(frozen=True)
class PasswordCredentialId:
    """The identifier of a password credential: ``{objectId}/{keyId}``."""

    object_id: str
    key_id: str

    def __str__(self) -> str:
        return f"{self.object_id}/{self.key_id}"


def parse_object_sub_resource_id(id_string: str, expected_type: str) -> ObjectSubResourceId:
    """Parse and check an ``{objectId}/{type}/{subId}`` identifier."""
    parts = id_string.split("/")
    if len(parts) != 3:
        raise ValueError(
            "Object Resource ID should be in the format {objectId}/{keyId} - "
            f"but got {id_string!r}"
        )
    object_id, type_, sub_id = parts
    try:
        parse_uuid(object_id)
    except ValueError as err:
        raise ValueError(f"Object ID isn't a valid UUID ({object_id!r}): {err}") from err
    if type_ == "":
        raise ValueError("Type in {objectID}/{type}/{subID} should not blank")
    if type_ != expected_type:
        raise ValueError(
            f"Type in {{objectID}}/{{type}}/{{subID}} was expected to be {expected_type}, got {type_}"
        )
    try:
        parse_uuid(sub_id)
    except ValueError as err:
        raise ValueError(
            f"Object Sub Resource ID isn't a valid UUID ({sub_id!r}): {err}"
        ) from err
    return ObjectSubResourceId(object_id, type_, sub_id)


def group_member_id_from(group_id: str, member_id: str) -> GroupMemberId:
    """Build the membership identifier of a member in a group."""
    return GroupMemberId(group_id, MEMBER_TYPE, member_id)


def parse_group_member_id(id_string: str) -> GroupMemberId:
    """Parse a ``{groupId}/member/{memberId}`` identifier."""
    try:
        parsed = parse_object_sub_resource_id(id_string, MEMBER_TYPE)
    except ValueError as err:
        raise ValueError(f"Unable to parse Member ID: {err}") from err
    return GroupMemberId(parsed.object_id, parsed.type, parsed.sub_id)


def parse_password_credential_id(id_string: str) -> PasswordCredentialId:
    """Parse an ``{objectId}/{keyId}`` password credential identifier."""
    parts = id_string.split("/")
    if len(parts) != 2:
        raise ValueError(
            "Password Credential ID should be in the format {objectId}/{keyId} - "
            f"but got {id_string!r}"
        )
    object_id, key_id = parts
    try:
        parse_uuid(object_id)
    except ValueError as err:
        raise ValueError(f"Object ID isn't a valid UUID ({object_id!r}): {err}") from err
    try:
        parse_uuid(key_id)
    except ValueError as err:
        raise ValueError(f"Credential ID isn't a valid UUID ({key_id!r}): {err}") from err
    return PasswordCredentialId(object_id, key_id)