"""Shared fixtures: a small Swagger 2.0 petstore document and its parsed model."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from clientgen.schema_parser import parse_api

PETSTORE: dict[str, Any] = {
    "swagger": "2.0",
    "info": {
        "title": "Pet Store",
        "version": "2.3.1",
        "description": 'A "sample" pet store',
        "contact": {"url": "https://petstore.example.com"},
        "license": {"name": "Apache 2.0", "url": "https://www.apache.org/licenses/LICENSE-2.0"},
    },
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "tags": ["pet"],
                "summary": "List all pets",
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"},
                    {
                        "name": "tags",
                        "in": "query",
                        "type": "array",
                        "items": {"type": "string"},
                    },
                ],
                "responses": {
                    "200": {
                        "description": "ok",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    }
                },
            },
            "post": {
                "operationId": "create_pet",
                "tags": ["pet"],
                "parameters": [
                    {
                        "name": "body",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/NewPet"},
                    }
                ],
                "responses": {"201": {"description": "created"}},
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "type": "integer", "format": "int64"}
            ],
            "get": {
                "operationId": "ShowPetById",
                "tags": ["pet"],
                "responses": {"200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}}},
            },
            "delete": {
                "tags": ["pet"],
                "parameters": [{"name": "X-Request-Id", "in": "header", "type": "string"}],
                "responses": {"204": {"description": "deleted"}},
            },
        },
        "/store/inventory": {
            "get": {
                "operationId": "getInventory",
                "tags": ["store-front"],
                "responses": {
                    "200": {
                        "description": "ok",
                        "schema": {
                            "type": "object",
                            "additionalProperties": {"type": "integer", "format": "int32"},
                        },
                    }
                },
            }
        },
        "/health": {
            "get": {
                "operationId": "health-check",
                "responses": {"200": {"description": "ok"}},
            }
        },
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "required": ["id", "name"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
                "birthDate": {"type": "string", "format": "date"},
                "attributes": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        },
        "NewPet": {
            "allOf": [
                {"$ref": "#/definitions/Pet"},
                {"type": "object", "properties": {"ownerId": {"type": "string", "format": "uuid"}}},
            ]
        },
    },
}


@pytest.fixture
def petstore_spec() -> dict[str, Any]:
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_api(petstore_spec):
    return parse_api(petstore_spec)
