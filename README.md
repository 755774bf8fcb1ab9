# adgraph

Helpers for working with directory objects exposed by a Graph-style
directory API: groups, users, service principals and domains.

The package does not talk to the network itself. Every lookup takes a
`client` object that you supply, offering calls such as `get(...)` and
`list(filter)` and raising on failure; it can be a real API client or a
stub in tests.

## Modules

- `adgraph.validate` – validators taking `(value, key)`: `validate_uuid`,
  `no_empty_strings`, `string_is_email_address`, `url_is_https`,
  `url_is_http_or_https`, `url_is_app_uri`, and `url_with_scheme(schemes)`
  to build your own. Each returns the value when acceptable and raises
  `ValidationError` (a `ValueError` with `key` and `message`) otherwise.
  `parse_uuid` turns a hyphenated UUID string into its 16 bytes.
- `adgraph.ids` – `ObjectSubResourceId` (`{objectId}/{type}/{subId}`),
  `GroupMemberId` (`{groupId}/member/{memberId}`) and
  `PasswordCredentialId` (`{objectId}/{keyId}`), with
  `parse_object_sub_resource_id`, `parse_group_member_id`,
  `group_member_id_from` and `parse_password_credential_id`. Parsing
  raises `ValueError` on a malformed identifier.
- `adgraph.response` – `Response`, `GraphError`, `DetailedError`,
  `NetworkError`, plus `response_was_status_code`,
  `response_was_not_found` and `response_error_is_retryable`.
- `adgraph.models` – dataclasses for `Application`, `AppRole`,
  `OAuth2Permission`, `RequiredResourceAccess`, `ResourceAccess`,
  `PasswordCredential`, `Domain`, `ADGroup`, `User` and
  `ServicePrincipal`; `flatten_app_roles` and `flatten_oauth2_permissions`
  turn roles and permissions into dictionaries holding only the set fields.
- `adgraph.replication` – `StateChangeConf` polls a refresh function until
  a target state is seen often enough (`wait_for_state`, raising
  `WaitTimeoutError` on timeout); `wait_for_replication(fetch)` polls a
  call until it succeeds ten times running, for up to five minutes.
- `adgraph.credentials` – `parse_duration` (e.g. `"1h30m"`, `"300ms"`),
  `password_credential_for_resource` (absolute RFC 3339 `end_date` or
  relative `end_date_relative`), `find_by_key_id`, `add_credential`,
  `remove_by_key_id` and `wait_for_password_credential_replication`.
- `adgraph.group` – `group_get_by_display_name`, `directory_objects_to_ids`,
  `group_all_members`, `group_all_owners`, `group_add_member(s)` and
  `group_add_owner(s)`.
- `adgraph.user` – `user_get_by_object_id`.
- `adgraph.data_domains` – `flatten_domains` and `read_domains`.
- `adgraph.data_group`, `adgraph.data_groups` – `read_group` (with member
  and owner ids) and `read_groups`.
- `adgraph.data_user`, `adgraph.data_users` – `read_user` and `read_users`.
- `adgraph.data_service_principal` – `read_service_principal` by object id,
  display name or application id.

The `read_*` functions return a plain dictionary of the object's state,
including an `"id"` entry.

## Install

```
pip install .
```

## Examples

```python
from adgraph.validate import ValidationError, url_is_https, validate_uuid
from adgraph.ids import group_member_id_from, parse_group_member_id

url_is_https("https://www.example.com", "homepage")   # returns the URL

try:
    validate_uuid("hello-world", "object_id")
except ValidationError as exc:
    print(exc)

member_id = group_member_id_from(
    "00000000-0000-0000-0000-000000000001",
    "00000000-0000-0000-0000-000000000002",
)
print(str(member_id))
# 00000000-0000-0000-0000-000000000001/member/00000000-0000-0000-0000-000000000002
assert parse_group_member_id(str(member_id)) == member_id
```

Reading domains, keeping only the default one:

```python
from adgraph.data_domains import read_domains

state = read_domains(client, tenant_id, only_default=True)
for domain in state["domains"]:
    print(domain["domain_name"], domain["is_verified"])
```

## What it does not do

- It has no HTTP client, authentication or provider configuration: you
  bring the client object.
- It has no lookup of applications; `Application` is only a data model.
- It has no command-line interface.

## Running the tests

```
pip install .[test]
pytest
```