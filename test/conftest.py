from __future__ import annotations

import copy
import json

import pytest
from hypothesis import settings

from oasgraph.config import OasGraphConfig
from oasgraph.translation.context import TranslationContext

# Register Hypothesis profile. Could be used as
# `pytest test --hypothesis-profile <profile-name>`
settings.register_profile("CI", max_examples=2000)

PETSTORE = {
    "openapi": "3.0.2",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "parameters": [{"name": "limit", "in": "query", "schema": {"type": "integer"}}],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
                            }
                        },
                    }
                },
            },
            "post": {
                "operationId": "createPet",
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": {"$ref": "#/components/schemas/NewPet"}}},
                },
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
                    }
                },
            },
        },
        "/pets/{pet-id}": {
            "parameters": [{"name": "pet-id", "in": "path", "required": True, "schema": {"type": "integer"}}],
            "get": {
                "operationId": "getPet",
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
                        "links": {
                            "owner": {
                                "operationId": "getOwner",
                                "parameters": {"owner-id": "$response.body#/owner_id"},
                                "description": "Owner of the pet",
                            }
                        },
                    }
                },
            },
        },
        "/owners/{owner-id}": {
            "get": {
                "operationId": "getOwner",
                "parameters": [
                    {"name": "owner-id", "in": "path", "required": True, "schema": {"type": "integer"}},
                    {"name": "X-Request-Id", "in": "header", "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "OK",
                        "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Owner"}}},
                    }
                },
            }
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                    "status": {"$ref": "#/components/schemas/Status"},
                    "owner_id": {"type": "integer"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
            },
            "NewPet": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "status": {"$ref": "#/components/schemas/Status"},
                    "pet-tag": {"type": "string"},
                },
            },
            "Status": {"type": "string", "enum": ["available", "pending", "sold"]},
            "Owner": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, "full-name": {"type": "string"}},
            },
        }
    },
}

SWAGGER = {
    "swagger": "2.0",
    "info": {"title": "Users", "version": "1.0.0"},
    "paths": {
        "/users/{id}": {
            "parameters": [{"name": "id", "in": "path", "required": True, "type": "integer"}],
            "get": {
                "operationId": "getUser",
                "responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/User"}}},
            },
            "put": {
                "operationId": "updateUser",
                "parameters": [
                    {"name": "body", "in": "body", "required": True, "schema": {"$ref": "#/definitions/User"}},
                ],
                "responses": {"200": {"description": "OK", "schema": {"$ref": "#/definitions/User"}}},
            },
        }
    },
    "definitions": {
        "User": {
            "type": "object",
            "required": ["name"],
            "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
        }
    },
}


@pytest.fixture
def config():
    return OasGraphConfig()


@pytest.fixture
def ctx(config):
    return TranslationContext.from_config(config)


@pytest.fixture
def petstore():
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def swagger():
    return copy.deepcopy(SWAGGER)


@pytest.fixture
def petstore_path(tmp_path, petstore):
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(petstore))
    return path


class FakeAPI:
    """Stand-in for an HTTP client, records prepared requests."""

    def __init__(self, responses):
        self.responses = responses
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.responses[request.operation_id]


@pytest.fixture
def fake_api():
    return FakeAPI
