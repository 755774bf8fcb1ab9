import pytest

from adgraph.data_service_principal import read_service_principal
from adgraph.models import AppRole, OAuth2Permission, ServicePrincipal
from adgraph.response import GraphError, Response

OBJECT_ID = "00000000-0000-4000-8000-000000000011"
APP_ID = "00000000-0000-4000-8000-000000000022"
OTHER_ID = "00000000-0000-4000-8000-000000000033"


class FakeServicePrincipals:
    def __init__(self, principals=(), listed=None, error=None):
        self.principals = {p.object_id: p for p in principals}
        self.listed = listed
        self.error = error
        self.filters = []

    def get(self, object_id):
        if self.error is not None:
            raise self.error
        try:
            return self.principals[object_id]
        except KeyError:
            raise GraphError("not found", Response(404)) from None

    def list(self, filter_):
        self.filters.append(filter_)
        if self.error is not None:
            raise self.error
        return self.listed


def make_sp(**kwargs):
    defaults = dict(object_id=OBJECT_ID, app_id=APP_ID, display_name="acctestSP")
    defaults.update(kwargs)
    return ServicePrincipal(**defaults)


def test_by_object_id():
    sp = make_sp(
        app_roles=[AppRole(value="read")],
        oauth2_permissions=[OAuth2Permission(admin_consent_description="desc")],
    )
    state = read_service_principal(FakeServicePrincipals([sp]), object_id=OBJECT_ID)
    assert state["id"] == OBJECT_ID
    assert state["application_id"] == APP_ID
    assert state["display_name"] == "acctestSP"
    assert state["app_roles"] == [{"value": "read"}]
    assert state["oauth2_permissions"] == [{"admin_consent_description": "desc"}]


def test_by_object_id_not_found():
    with pytest.raises(LookupError, match="was not found!"):
        read_service_principal(FakeServicePrincipals(), object_id=OBJECT_ID)


def test_by_object_id_other_error():
    client = FakeServicePrincipals(error=GraphError("boom", Response(500)))
    with pytest.raises(GraphError, match="Error retrieving Service Principal ID") as info:
        read_service_principal(client, object_id=OBJECT_ID)
    assert info.value.response.status_code == 500


def test_by_display_name_picks_exact_match():
    listed = [
        make_sp(object_id=OTHER_ID, display_name=None),
        make_sp(object_id=OTHER_ID, display_name="acctestSP-other"),
        make_sp(object_id=OBJECT_ID, display_name="acctestSP"),
    ]
    client = FakeServicePrincipals(listed=listed)
    state = read_service_principal(client, display_name="acctestSP")
    assert client.filters == ["displayName eq 'acctestSP'"]
    assert state["id"] == OBJECT_ID


def test_by_display_name_missing():
    client = FakeServicePrincipals(listed=[make_sp(display_name="x")])
    with pytest.raises(LookupError, match="Display Name"):
        read_service_principal(client, display_name="acctestSP")


def test_by_application_id():
    listed = [make_sp(object_id=OTHER_ID, app_id=None), make_sp()]
    client = FakeServicePrincipals(listed=listed)
    state = read_service_principal(client, application_id=APP_ID)
    assert client.filters == [f"appId eq '{APP_ID}'"]
    assert state["object_id"] == OBJECT_ID
    assert state["application_id"] == APP_ID


def test_by_application_id_none_listed():
    client = FakeServicePrincipals(listed=None)
    with pytest.raises(LookupError, match="for Application ID"):
        read_service_principal(client, application_id=APP_ID)


def test_list_error():
    client = FakeServicePrincipals(error=GraphError("boom", Response(503)))
    with pytest.raises(GraphError, match="Error listing Service Principals") as info:
        read_service_principal(client, display_name="acctestSP")
    assert info.value.response.status_code == 503


def test_nil_object_id():
    client = FakeServicePrincipals(listed=[make_sp(object_id=None)])
    with pytest.raises(LookupError, match="objectId is nil"):
        read_service_principal(client, application_id=APP_ID)