"""Tests for the schema_parser module."""

import json

import pytest

from clientgen.errors import SpecLoadError
from clientgen.loader import load_spec, resolve_ref
from clientgen.models import Array, MapOf, Primitive, Reference
from clientgen.schema_parser import (
    derive_operation_id,
    get_return_type,
    parse_definitions,
    parse_metadata,
    parse_operations,
    parse_parameters,
    resolve_schema_type,
)


class TestResolveSchemaType:
    """Test schema object → SchemaType conversion."""

    def test_string(self):
        assert resolve_schema_type({"type": "string"}) == Primitive("string")

    def test_formats(self):
        assert resolve_schema_type({"type": "string", "format": "date-time"}) == Primitive("date-time")
        assert resolve_schema_type({"type": "string", "format": "uuid"}) == Primitive("uuid")
        assert resolve_schema_type({"type": "integer", "format": "int64"}) == Primitive("long")
        assert resolve_schema_type({"type": "number", "format": "double"}) == Primitive("double")

    def test_unknown_format_falls_back_to_type(self):
        assert resolve_schema_type({"type": "string", "format": "email"}) == Primitive("string")

    def test_ref(self):
        assert resolve_schema_type({"$ref": "#/definitions/Pet"}) == Reference("Pet")

    def test_openapi3_ref(self):
        assert resolve_schema_type({"$ref": "#/components/schemas/Pet"}) == Reference("Pet")

    def test_array_of_refs(self):
        schema = {"type": "array", "items": {"$ref": "#/definitions/Pet"}}
        assert resolve_schema_type(schema) == Array(Reference("Pet"))

    def test_map(self):
        schema = {"type": "object", "additionalProperties": {"type": "integer"}}
        assert resolve_schema_type(schema) == MapOf(Primitive("integer"))

    def test_nested(self):
        schema = {
            "type": "array",
            "items": {"type": "object", "additionalProperties": {"type": "array", "items": {"type": "string"}}},
        }
        assert resolve_schema_type(schema) == Array(MapOf(Array(Primitive("string"))))

    def test_free_form_object(self):
        assert resolve_schema_type({"type": "object"}) == Primitive("object")
        assert resolve_schema_type({}) == Primitive("object")
        assert resolve_schema_type(None) == Primitive("object")

    def test_all_of_ref(self):
        assert resolve_schema_type({"allOf": [{"$ref": "#/definitions/Pet"}]}) == Reference("Pet")


class TestParseParameters:
    def test_path_level_parameters_merged(self, petstore_spec):
        path_item = petstore_spec["paths"]["/pets/{petId}"]
        params = parse_parameters(petstore_spec, path_item["delete"], path_item)
        assert [(p.name, p.location) for p in params] == [
            ("petId", "path"),
            ("X-Request-Id", "header"),
        ]
        assert params[0].required
        assert params[0].schema == Primitive("long")

    def test_operation_overrides_path_level(self, petstore_spec):
        path_item = {"parameters": [{"name": "q", "in": "query", "type": "string"}]}
        operation = {"parameters": [{"name": "q", "in": "query", "type": "integer"}]}
        params = parse_parameters(petstore_spec, operation, path_item)
        assert len(params) == 1
        assert params[0].schema == Primitive("integer")

    def test_body_parameter(self, petstore_spec):
        operation = petstore_spec["paths"]["/pets"]["post"]
        params = parse_parameters(petstore_spec, operation)
        assert params[0].location == "body"
        assert params[0].schema == Reference("NewPet")

    def test_shared_parameter_ref(self):
        spec = {"parameters": {"Limit": {"name": "limit", "in": "query", "type": "integer"}}}
        params = parse_parameters(spec, {"parameters": [{"$ref": "#/parameters/Limit"}]})
        assert params[0].name == "limit"

    def test_openapi3_request_body(self):
        operation = {
            "requestBody": {
                "required": True,
                "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
            }
        }
        params = parse_parameters({}, operation)
        assert params[0].name == "body"
        assert params[0].required
        assert params[0].schema == Reference("Pet")


class TestReturnType:
    def test_swagger2(self):
        op = {"responses": {"200": {"schema": {"type": "string"}}}}
        assert get_return_type({}, op) == Primitive("string")

    def test_openapi3(self):
        op = {"responses": {"200": {"content": {"application/json": {"schema": {"type": "boolean"}}}}}}
        assert get_return_type({}, op) == Primitive("boolean")

    def test_no_body(self):
        assert get_return_type({}, {"responses": {"204": {"description": "gone"}}}) is None

    def test_shared_swagger2_response(self):
        spec = {
            "responses": {
                "PetList": {
                    "description": "pets",
                    "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                }
            }
        }
        op = {"responses": {"200": {"$ref": "#/responses/PetList"}}}
        assert get_return_type(spec, op) == Array(Reference("Pet"))

    def test_shared_openapi3_response(self):
        spec = {
            "components": {
                "responses": {
                    "PetResponse": {
                        "description": "one pet",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}
                        },
                    }
                }
            }
        }
        op = {"responses": {"200": {"$ref": "#/components/responses/PetResponse"}}}
        assert get_return_type(spec, op) == Reference("Pet")

    def test_shared_response_reaches_operation(self, petstore_spec):
        petstore_spec["responses"] = {
            "PetList": {
                "description": "pets",
                "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
            }
        }
        petstore_spec["paths"]["/pets"]["get"]["responses"] = {
            "200": {"$ref": "#/responses/PetList"}
        }
        ops = parse_operations(petstore_spec)
        assert ops[0].return_type == Array(Reference("Pet"))


class TestParseOperations:
    def test_document_order(self, petstore_spec):
        ops = parse_operations(petstore_spec)
        assert [op.id for op in ops] == [
            "listPets",
            "create_pet",
            "ShowPetById",
            "delete_pets_by_petId",
            "getInventory",
            "health-check",
        ]

    def test_methods_upper_case_before_post_processing(self, petstore_spec):
        ops = parse_operations(petstore_spec)
        assert ops[0].http_method == "GET"

    def test_blank_operation_id_kept(self):
        spec = {"paths": {"/x": {"get": {"operationId": "", "responses": {}}}}}
        assert parse_operations(spec)[0].id == ""

    def test_derive_operation_id(self):
        assert derive_operation_id("GET", "/pets/{petId}") == "get_pets_by_petId"
        assert derive_operation_id("post", "/") == "post"


class TestParseDefinitions:
    def test_properties(self, petstore_spec):
        defs = parse_definitions(petstore_spec)
        pet = defs[0]
        assert pet.name == "Pet"
        assert [p.name for p in pet.properties] == ["id", "name", "birthDate", "attributes"]
        assert pet.properties[0].required
        assert not pet.properties[2].required
        assert pet.properties[3].schema == MapOf(Primitive("string"))

    def test_all_of_merged(self, petstore_spec):
        new_pet = parse_definitions(petstore_spec)[1]
        names = [p.name for p in new_pet.properties]
        assert names == ["id", "name", "birthDate", "attributes", "ownerId"]

    def test_openapi3_components(self):
        spec = {"components": {"schemas": {"Tag": {"properties": {"label": {"type": "string"}}}}}}
        assert parse_definitions(spec)[0].name == "Tag"


class TestParseMetadata:
    def test_full(self, petstore_spec):
        meta = parse_metadata(petstore_spec)
        assert meta.title == "Pet Store"
        assert meta.version == "2.3.1"
        assert meta.contact_url == "https://petstore.example.com"
        assert meta.license_name == "Apache 2.0"

    def test_missing_info(self):
        meta = parse_metadata({})
        assert meta.title is None
        assert meta.license_url is None


class TestLoader:
    def test_load_spec(self, tmp_path, petstore_spec):
        path = tmp_path / "api.json"
        path.write_text(json.dumps(petstore_spec))
        assert load_spec(path)["info"]["title"] == "Pet Store"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpecLoadError):
            load_spec(tmp_path / "nope.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text("[1, 2]")
        with pytest.raises(SpecLoadError):
            load_spec(path)

    def test_resolve_ref(self, petstore_spec):
        assert resolve_ref(petstore_spec, "#/definitions/Pet")["type"] == "object"
