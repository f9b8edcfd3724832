"""Parse an API document into the abstract API model.

Handles:
- Swagger 2.0 ``type``/``format`` pairs and OpenAPI 3 ``schema`` objects
- $ref to named models (kept as references, never inlined)
- $ref to shared parameters, request bodies and responses
- ``additionalProperties`` maps and ``items`` arrays, nested to any depth
- allOf property merging for model definitions
- Path-level parameters merged into each operation
- Swagger ``body`` parameters and OpenAPI 3 ``requestBody``
- Operation ids derived from method + path when absent

Paths, operations and definitions keep the document's order.
"""

from __future__ import annotations

from typing import Any

from .loader import get_info, get_paths, get_schemas, ref_name, resolve_ref
from .models import (
    AbstractApiModel,
    ApiMetadata,
    Array,
    MapOf,
    ModelDefinition,
    ModelProperty,
    Operation,
    Parameter,
    Primitive,
    Reference,
    SchemaType,
)

_HTTP_METHODS = {"get", "put", "post", "delete", "options", "head", "patch", "trace"}

# (type, format) -> primitive name; format None is the fallback for the type
_PRIMITIVES: dict[tuple[str, str | None], str] = {
    ("string", None): "string",
    ("string", "date"): "date",
    ("string", "date-time"): "date-time",
    ("string", "uuid"): "uuid",
    ("string", "byte"): "byte-array",
    ("string", "binary"): "binary",
    ("integer", None): "integer",
    ("integer", "int32"): "integer",
    ("integer", "int64"): "long",
    ("number", None): "number",
    ("number", "float"): "float",
    ("number", "double"): "double",
    ("boolean", None): "boolean",
    ("file", None): "file",
}

_SUCCESS_CODES = ("200", "201", "202", "default")


def resolve_schema_type(schema: dict[str, Any] | None) -> SchemaType:
    """Convert a schema object to a SchemaType."""
    if not schema:
        return Primitive("object")

    if "$ref" in schema:
        return Reference(ref_name(schema["$ref"]))

    for key in ("allOf", "oneOf", "anyOf"):
        for sub in schema.get(key, []):
            if "$ref" in sub:
                return Reference(ref_name(sub["$ref"]))
        if key in schema:
            return Primitive("object")

    schema_type = schema.get("type")
    if schema_type == "array":
        return Array(resolve_schema_type(schema.get("items")))

    if schema_type == "object" or "properties" in schema or "additionalProperties" in schema:
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return MapOf(resolve_schema_type(additional))
        if additional is True:
            return MapOf(Primitive("object"))
        return Primitive("object")

    if schema_type is None:
        return Primitive("object")

    fmt = schema.get("format")
    name = _PRIMITIVES.get((schema_type, fmt)) or _PRIMITIVES.get((schema_type, None))
    return Primitive(name or schema_type)


def _parameter_schema(param: dict[str, Any]) -> dict[str, Any]:
    # Swagger 2.0 non-body parameters carry their type inline
    return param.get("schema") or param


def _resolve(spec: dict[str, Any], node: dict[str, Any]) -> dict[str, Any]:
    """Follow a $ref to a shared parameter, request body or response."""
    if "$ref" in node:
        return resolve_ref(spec, node["$ref"])
    return node


def parse_parameters(
    spec: dict[str, Any],
    operation: dict[str, Any],
    path_item: dict[str, Any] | None = None,
) -> list[Parameter]:
    """Parse all parameters for an operation, path-level ones first."""
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in [*(path_item or {}).get("parameters", []), *operation.get("parameters", [])]:
        param = _resolve(spec, raw)
        merged[(param.get("name", ""), param.get("in", "query"))] = param

    params = [
        Parameter(
            name=param.get("name", ""),
            schema=resolve_schema_type(_parameter_schema(param)),
            location=param.get("in", "query"),
            required=bool(param.get("required", False)),
            description=param.get("description", ""),
        )
        for param in merged.values()
    ]

    request_body = operation.get("requestBody")
    if request_body:
        request_body = _resolve(spec, request_body)
        content = request_body.get("content", {})
        media = content.get("application/json") or next(iter(content.values()), {})
        params.append(
            Parameter(
                name="body",
                schema=resolve_schema_type(media.get("schema")),
                location="body",
                required=bool(request_body.get("required", False)),
                description=request_body.get("description", ""),
            )
        )

    return params


def get_return_type(
    spec: dict[str, Any], operation: dict[str, Any]
) -> SchemaType | None:
    """Return the schema type of the first success response, if it has one."""
    responses = operation.get("responses", {})
    for code in _SUCCESS_CODES:
        response = responses.get(code)
        if not response:
            continue
        response = _resolve(spec, response)
        if "schema" in response:
            return resolve_schema_type(response["schema"])
        content = response.get("content", {})
        for media in content.values():
            if "schema" in media:
                return resolve_schema_type(media["schema"])
    return None


def derive_operation_id(method: str, path: str) -> str:
    """Build an operation id from method and path (``get_pets_by_petId``)."""
    parts = [method.lower()]
    for segment in path.split("/"):
        if not segment:
            continue
        if segment.startswith("{") and segment.endswith("}"):
            parts.append("by_" + segment[1:-1])
        else:
            parts.append(segment)
    return "_".join(parts)


def parse_operations(spec: dict[str, Any]) -> list[Operation]:
    """Parse every operation, in document order."""
    operations: list[Operation] = []
    for path, path_item in get_paths(spec).items():
        for method, operation in path_item.items():
            if method.lower() not in _HTTP_METHODS:
                continue
            if "operationId" in operation:
                op_id = operation["operationId"] or ""
            else:
                op_id = derive_operation_id(method, path)
            operations.append(
                Operation(
                    id=op_id,
                    http_method=method.upper(),
                    path=path,
                    parameters=parse_parameters(spec, operation, path_item),
                    return_type=get_return_type(spec, operation),
                    tags=list(operation.get("tags", [])),
                    summary=operation.get("summary", ""),
                    notes=operation.get("description", ""),
                )
            )
    return operations


def _merge_all_of(spec: dict[str, Any], schema: dict[str, Any]) -> dict[str, Any]:
    """Flatten allOf composition into one object schema."""
    if "allOf" not in schema:
        return schema
    merged_props: dict[str, Any] = {}
    merged_required: list[str] = []
    for sub in schema["allOf"]:
        if "$ref" in sub:
            sub = resolve_ref(spec, sub["$ref"])
        sub = _merge_all_of(spec, sub)
        merged_props.update(sub.get("properties", {}))
        merged_required.extend(sub.get("required", []))
    return {
        "type": "object",
        "description": schema.get("description", ""),
        "properties": merged_props,
        "required": merged_required,
    }


def parse_definitions(spec: dict[str, Any]) -> list[ModelDefinition]:
    """Parse named models, in document order."""
    definitions: list[ModelDefinition] = []
    for name, schema in get_schemas(spec).items():
        schema = _merge_all_of(spec, schema)
        required = set(schema.get("required", []))
        properties = tuple(
            ModelProperty(
                name=prop_name,
                schema=resolve_schema_type(prop_schema),
                required=prop_name in required,
                description=prop_schema.get("description", ""),
            )
            for prop_name, prop_schema in schema.get("properties", {}).items()
        )
        definitions.append(
            ModelDefinition(
                name=name,
                properties=properties,
                description=schema.get("description", ""),
            )
        )
    return definitions


def parse_metadata(spec: dict[str, Any]) -> ApiMetadata:
    """Parse the info block."""
    info = get_info(spec)
    contact = info.get("contact") or {}
    license_ = info.get("license") or {}
    return ApiMetadata(
        title=info.get("title"),
        version=info.get("version"),
        description=info.get("description"),
        contact_url=contact.get("url"),
        license_name=license_.get("name"),
        license_url=license_.get("url"),
    )


def parse_api(spec: dict[str, Any]) -> AbstractApiModel:
    """Parse a full API document."""
    return AbstractApiModel(
        operations=parse_operations(spec),
        definitions=parse_definitions(spec),
        metadata=parse_metadata(spec),
    )
