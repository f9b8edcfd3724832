"""Abstract API model and generation data shapes.

The parser collaborator builds an :class:`AbstractApiModel` out of these
types; the transformation pipeline reads it and produces a list of
:class:`RenderPlanEntry` objects for the renderer.

Schema types form a small tagged variant::

    Primitive("string")
    Array(Primitive("string"))
    MapOf(Array(Reference("Pet")))
    Reference("Pet")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


# --- Schema types ---


@dataclass(frozen=True)
class Primitive:
    name: str


@dataclass(frozen=True)
class Array:
    inner: SchemaType


@dataclass(frozen=True)
class MapOf:
    """String-keyed map; only the value type is tracked."""

    inner: SchemaType


@dataclass(frozen=True)
class Reference:
    model_name: str


SchemaType = Union[Primitive, Array, MapOf, Reference]


# --- Parsed API ---


@dataclass
class Parameter:
    """One operation parameter.

    ``param_name`` and ``data_type`` are filled in by the naming pass;
    ``name`` always keeps the value from the source document.
    """

    name: str
    schema: SchemaType
    location: str = "query"
    required: bool = False
    description: str = ""
    param_name: Optional[str] = None
    data_type: Optional[str] = None


@dataclass
class Operation:
    """One HTTP operation.

    ``id`` is the raw identifier from the source document and is never
    overwritten. The naming pass writes ``operation_id`` and
    ``return_data_type``; the post-processor lower-cases ``http_method``.
    """

    id: str
    http_method: str
    path: str = ""
    parameters: list[Parameter] = field(default_factory=list)
    return_type: Optional[SchemaType] = None
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    notes: str = ""
    operation_id: Optional[str] = None
    return_data_type: Optional[str] = None


@dataclass(frozen=True)
class ModelProperty:
    name: str
    schema: SchemaType
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class ModelDefinition:
    name: str
    properties: tuple[ModelProperty, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class ApiMetadata:
    """The ``info`` block of the source document. Every field is optional."""

    title: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    contact_url: Optional[str] = None
    license_name: Optional[str] = None
    license_url: Optional[str] = None


@dataclass
class AbstractApiModel:
    operations: list[Operation] = field(default_factory=list)
    definitions: list[ModelDefinition] = field(default_factory=list)
    metadata: ApiMetadata = field(default_factory=ApiMetadata)


# --- Generation output ---


class GenerationContext(BaseModel):
    """Generation-wide values, resolved once per run and frozen afterwards."""

    model_config = ConfigDict(frozen=True)

    project_name: str
    project_description: str
    project_version: str
    project_url: Optional[str] = None
    license_name: Optional[str] = None
    license_url: Optional[str] = None
    base_namespace: str
    api_package: str

    def template_vars(self) -> dict[str, Any]:
        """Return the context as a plain dict for template rendering."""
        return self.model_dump()


@dataclass(frozen=True)
class RenderPlanEntry:
    template_id: str
    output_path: tuple[str, ...]
    context: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def relative_path(self) -> str:
        return "/".join(self.output_path)
