import pytest

from oasgraph.config import OasGraphConfig
from oasgraph.core.errors import ResolverError
from oasgraph.core.naming import NameRegistry
from oasgraph.resolvers import PreparedRequest, build_resolver, desanitize
from oasgraph.translation import Operation, TranslationContext, build_args

UPDATE_PET = Operation(
    operation_id="updatePet",
    method="put",
    path="/pets/{pet-id}",
    parameters=[
        {"name": "pet-id", "in": "path", "required": True, "schema": {"type": "integer"}},
        {"name": "dry-run", "in": "query", "schema": {"type": "boolean"}},
        {"name": "X-Request-Id", "in": "header", "schema": {"type": "string"}},
        {"name": "session", "in": "cookie", "schema": {"type": "string"}},
    ],
    response_schema_name="Pet",
    request_schema_name="PetInput",
)
PET = {
    "type": "object",
    "properties": {"pet-name": {"type": "string"}, "tags": {"type": "array", "items": {"type": "string"}}},
}


@pytest.fixture
def api(fake_api):
    return fake_api({"updatePet": {"id": 1}})


def make_context(api, **config):
    ctx = TranslationContext.from_config(OasGraphConfig(**config), fetch=api)
    ctx.input_defs["PetInput"] = PET
    build_args(UPDATE_PET.parameters, UPDATE_PET.request_schema_name, context=ctx)
    # Register input field names
    ctx.input_types["PetInput"].fields
    return ctx


def test_request(api):
    ctx = make_context(api, base_url="http://127.0.0.1/api/", headers={"Authorization": "token"}, qs={"key": "k"})
    resolver = build_resolver(UPDATE_PET, ctx)
    result = resolver(
        None,
        None,
        petId=5,
        dryRun=True,
        XRequestId="abc",
        session="s1",
        PetInput={"petName": "Rex", "tags": ["good"]},
    )
    assert result == {"id": 1}
    assert api.requests == [
        PreparedRequest(
            operation_id="updatePet",
            method="PUT",
            url="http://127.0.0.1/api/pets/5",
            path_parameters={"pet-id": 5},
            query={"dry-run": True, "key": "k"},
            headers={"X-Request-Id": "abc", "Authorization": "token"},
            cookies={"session": "s1"},
            body={"pet-name": "Rex", "tags": ["good"]},
        )
    ]


def test_omitted_arguments(api):
    ctx = make_context(api)
    build_resolver(UPDATE_PET, ctx)(None, None, petId=5, dryRun=None)
    request = api.requests[0]
    assert request.url == "/pets/5"
    assert request.query == {}
    assert request.body is None


def test_path_values_are_quoted(api):
    ctx = make_context(api)
    build_resolver(UPDATE_PET, ctx)(None, None, petId="a/b c")
    assert api.requests[0].url == "/pets/a%2Fb%20c"


def test_missing_path_parameter(api):
    ctx = make_context(api)
    with pytest.raises(ResolverError, match="Missing value for path parameter `pet-id` in `/pets/{pet-id}`"):
        build_resolver(UPDATE_PET, ctx)(None, None)


def test_preset_arguments(api):
    ctx = make_context(api)
    resolver = build_resolver(UPDATE_PET, ctx, {"pet-id": "pet/id", "X-Request-Id": "meta/request"})
    resolver({"pet": {"id": 7}, "meta": {}}, None)
    request = api.requests[0]
    assert request.path_parameters == {"pet-id": 7}
    # Missing pointer targets are not sent
    assert request.headers == {}


def test_no_fetch():
    ctx = make_context(None)
    with pytest.raises(ResolverError, match="No fetch function is configured to call operation `updatePet`"):
        build_resolver(UPDATE_PET, ctx)(None, None, petId=1)


def test_desanitize():
    names = NameRegistry()
    names.store("pet-name")
    names.store("owner-info")
    value = {"petName": "Rex", "ownerInfo": [{"petName": "Nested"}], "unknown": 1}
    assert desanitize(value, names) == {"pet-name": "Rex", "owner-info": [{"pet-name": "Nested"}], "unknown": 1}
    assert desanitize("petName", names) == "petName"


def test_as_requests_kwargs():
    request = PreparedRequest(operation_id="getPet", method="GET", url="http://127.0.0.1/pets/1", query={"a": 1})
    assert request.as_requests_kwargs() == {
        "method": "GET",
        "url": "http://127.0.0.1/pets/1",
        "params": {"a": 1},
        "headers": {},
    }
    request.body = {"name": "Rex"}
    request.cookies = {"session": "s1"}
    kwargs = request.as_requests_kwargs()
    assert kwargs["json"] == {"name": "Rex"}
    assert kwargs["cookies"] == {"session": "s1"}
