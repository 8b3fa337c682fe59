import logging

from oasgraph.config import OasGraphConfig
from oasgraph.openapi.preprocessing import get_definitions, preprocess


def make_document(paths, schemas=None):
    return {
        "openapi": "3.0.2",
        "info": {"title": "Test", "version": "0.1"},
        "paths": paths,
        "components": {"schemas": schemas or {}},
    }


def json_content(schema):
    return {"application/json": {"schema": schema}}


def test_definitions_in_both_namespaces(petstore):
    ctx = preprocess(petstore)
    assert ctx.output_defs["Pet"] is petstore["components"]["schemas"]["Pet"]
    assert ctx.input_defs["PetInput"] is petstore["components"]["schemas"]["Pet"]
    assert "Pet" not in ctx.input_defs


def test_operations(petstore):
    ctx = preprocess(petstore)
    assert list(ctx.operations) == ["listPets", "createPet", "getPet", "getOwner"]
    list_pets = ctx.operations["listPets"]
    assert list_pets.method == "get"
    assert not list_pets.is_mutation
    assert list_pets.label == "GET /pets"
    # Inline response schemas are named after the operation
    assert list_pets.response_schema_name == "listPetsResponse"
    assert ctx.output_defs["listPetsResponse"]["type"] == "array"
    create_pet = ctx.operations["createPet"]
    assert create_pet.is_mutation
    assert create_pet.response_schema_name == "Pet"
    assert create_pet.request_schema_name == "NewPetInput"
    assert create_pet.request_schema_required


def test_path_parameters_are_shared(petstore):
    ctx = preprocess(petstore)
    assert [parameter["name"] for parameter in ctx.operations["getPet"].parameters] == ["pet-id"]


def test_operation_parameters_win():
    shared = {"name": "id", "in": "path", "required": True, "description": "Shared"}
    own = {"name": "id", "in": "path", "required": True, "description": "Own"}
    document = make_document(
        {
            "/items/{id}": {
                "parameters": [shared],
                "get": {"operationId": "getItem", "parameters": [own], "responses": {}},
            }
        }
    )
    parameters = preprocess(document).operations["getItem"].parameters
    assert [parameter["description"] for parameter in parameters] == ["Own"]


def test_links(petstore):
    link = preprocess(petstore).operations["getPet"].links["owner"]
    assert link.name == "owner"
    assert link.operation_id == "getOwner"
    assert link.operation_ref is None
    assert link.parameters == {"owner-id": "$response.body#/owner_id"}
    assert link.description == "Owner of the pet"


def test_synthesized_operation_id():
    document = make_document({"/pets/{id}": {"delete": {"responses": {"204": {"description": "Deleted"}}}}})
    operation = preprocess(document).operations["deletePetsId"]
    assert operation.response_schema_name is None
    assert operation.description is None


def test_inline_request_body():
    document = make_document(
        {
            "/search": {
                "post": {
                    "operationId": "search",
                    "summary": "Search things",
                    "requestBody": {"content": json_content({"properties": {"q": {"type": "string"}}})},
                    "responses": {"200": {"description": "OK", "content": json_content({"type": "string"})}},
                }
            }
        }
    )
    ctx = preprocess(document)
    operation = ctx.operations["search"]
    assert operation.description == "Search things"
    assert operation.request_schema_name == "searchRequestInput"
    assert not operation.request_schema_required
    assert "q" in ctx.input_defs["searchRequestInput"]["properties"]
    assert ctx.output_defs["searchResponse"] == {"type": "string"}


def test_first_success_response():
    document = make_document(
        {
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "responses": {
                        "default": {"description": "Error", "content": json_content({"$ref": "#/c/s/Error"})},
                        "200": {"description": "OK", "content": json_content({"$ref": "#/c/s/Pets"})},
                        "202": {"description": "Accepted", "content": json_content({"$ref": "#/c/s/Job"})},
                    },
                }
            }
        }
    )
    assert preprocess(document).operations["listPets"].response_schema_name == "Pets"


def test_vendor_json_media_type():
    content = {"application/vnd.api+json": {"schema": {"$ref": "#/components/schemas/Pet"}}}
    document = make_document(
        {"/pets": {"get": {"operationId": "listPets", "responses": {"200": {"description": "OK", "content": content}}}}}
    )
    assert preprocess(document).operations["listPets"].response_schema_name == "Pet"


def test_non_json_response():
    content = {"text/plain": {"schema": {"type": "string"}}}
    document = make_document(
        {"/ping": {"get": {"operationId": "ping", "responses": {"200": {"description": "OK", "content": content}}}}}
    )
    assert preprocess(document).operations["ping"].response_schema_name is None


def test_duplicate_operation_id(caplog):
    responses = {"200": {"description": "OK"}}
    document = make_document(
        {
            "/a": {"get": {"operationId": "fetch", "responses": responses}},
            "/b": {"get": {"operationId": "fetch", "responses": responses}},
        }
    )
    with caplog.at_level(logging.WARNING):
        ctx = preprocess(document)
    assert "Duplicate operation id `fetch` in `GET /b`" in caplog.text
    assert ctx.operations["fetch"].path == "/b"


def test_swagger(swagger):
    ctx = preprocess(swagger)
    assert get_definitions(swagger) == swagger["definitions"]
    assert ctx.output_defs["User"] is swagger["definitions"]["User"]
    get_user = ctx.operations["getUser"]
    assert get_user.response_schema_name == "User"
    # Swagger 2 parameter types are moved under `schema`
    assert get_user.parameters == [
        {"name": "id", "in": "path", "required": True, "type": "integer", "schema": {"type": "integer"}}
    ]
    update_user = ctx.operations["updateUser"]
    # The body parameter becomes the request body
    assert [parameter["name"] for parameter in update_user.parameters] == ["id"]
    assert update_user.request_schema_name == "UserInput"
    assert update_user.request_schema_required


def test_context_config(petstore):
    config = OasGraphConfig(strict_names=True, max_iterations=7)
    ctx = preprocess(petstore, config)
    assert ctx.config is config
    assert ctx.names.strict
    assert ctx.max_iterations == 7
    assert ctx.fetch is None
