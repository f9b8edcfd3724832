"""Map schema types to clojure.spec type expressions.

  Primitive("integer")                 -> int?
  Array(Primitive("string"))           -> (s/coll-of string?)
  MapOf(Array(Primitive("uuid")))      -> (s/map-of string? (s/coll-of uuid?))
  Reference("PetOwner")                -> pet-owner-spec

Map keys are always ``string?``: the source schema only describes map
values, so key types are not carried through.
"""

from __future__ import annotations

from .models import Array, MapOf, Primitive, Reference, SchemaType
from .naming import to_model_name

ANY_SPEC = "any?"
SPEC_SUFFIX = "-spec"

TYPE_MAPPING: dict[str, str] = {
    "integer": "int?",
    "long": "int?",
    "short": "int?",
    "number": "float?",
    "float": "float?",
    "double": "float?",
    "array": "list?",
    "map": "map?",
    "boolean": "boolean?",
    "string": "string?",
    "char": "char?",
    "date": "inst?",
    "date-time": "inst?",
    "DateTime": "inst?",
    "uuid": "uuid?",
    "UUID": "uuid?",
    # No structural contract worth checking for these
    "object": ANY_SPEC,
    "file": ANY_SPEC,
    "binary": ANY_SPEC,
    "byte-array": ANY_SPEC,
    "ByteArray": ANY_SPEC,
}


def _reference_spec(model_name: str) -> str:
    name = to_model_name(model_name)
    if not name:
        return ANY_SPEC
    return name + SPEC_SUFFIX


def map_type(schema: SchemaType) -> str:
    """Return the spec expression for *schema*. Never raises."""
    if isinstance(schema, Array):
        return f"(s/coll-of {map_type(schema.inner)})"
    if isinstance(schema, MapOf):
        return f"(s/map-of string? {map_type(schema.inner)})"
    if isinstance(schema, Primitive):
        if schema.name in TYPE_MAPPING:
            return TYPE_MAPPING[schema.name]
        return _reference_spec(schema.name)
    if isinstance(schema, Reference):
        return _reference_spec(schema.model_name)
    return ANY_SPEC
