"""Resolve generation-wide metadata and escape free text for output.

Each :class:`~clientgen.models.GenerationContext` field is resolved with the
precedence: explicit option > value from the API document's ``info`` block >
built-in default. ``project_url`` and the license fields have no default;
templates omit them when they are ``None``.

Two escaping policies exist and are not interchangeable:

* :func:`escape_text` is for text placed inside a quoted string literal.
  It trims the text and backslash-escapes ``\\`` and ``"``.
* :func:`escape_token` is for text placed as a bare token. It drops ``"``
  entirely and defuses ``(comment`` so it cannot open a comment form.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import ApiMetadata, GenerationContext
from .namespace import logical_namespace
from .naming import NamingRole, dashize, to_identifier

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "swagger-clj-client"
DEFAULT_PROJECT_VERSION = "1.0.0"
DEFAULT_DESCRIPTION_PREFIX = "Client library of "
API_PACKAGE_SUFFIX = "api"

_UNSAFE_COMMENT = "(comment"
_DEFUSED_COMMENT = "(_comment"


class GeneratorOptions(BaseModel):
    """Explicit overrides for the generation context.

    Accepts either the camelCase option keys (``projectName``) or the field
    names. Blank values count as not configured.

    Example::

        GeneratorOptions.model_validate({"projectName": "petstore-client"})
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    project_name: Optional[str] = Field(default=None, alias="projectName")
    project_description: Optional[str] = Field(
        default=None, alias="projectDescription"
    )
    project_version: Optional[str] = Field(default=None, alias="projectVersion")
    project_url: Optional[str] = Field(default=None, alias="projectUrl")
    project_license_name: Optional[str] = Field(
        default=None, alias="projectLicenseName"
    )
    project_license_url: Optional[str] = Field(
        default=None, alias="projectLicenseUrl"
    )
    base_namespace: Optional[str] = Field(default=None, alias="baseNamespace")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def escape_text(text: Optional[str]) -> Optional[str]:
    """Escape *text* for embedding inside a double-quoted string literal."""
    if text is None:
        return None
    return text.strip().replace("\\", "\\\\").replace('"', '\\"')


def escape_quotation_mark(text: str) -> str:
    return text.replace('"', "")


def escape_unsafe_characters(text: str) -> str:
    return text.replace(_UNSAFE_COMMENT, _DEFUSED_COMMENT)


def escape_token(text: str) -> str:
    """Make *text* safe to embed as a bare token. Lossy."""
    return escape_unsafe_characters(escape_quotation_mark(text))


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def _project_name_from_title(title: Optional[str]) -> Optional[str]:
    if not title:
        return None
    return to_identifier(dashize(title), NamingRole.API_NAME) or None


def resolve_metadata(
    metadata: ApiMetadata,
    options: GeneratorOptions | Mapping[str, Any] | None = None,
) -> GenerationContext:
    """Build the frozen generation context for one run."""
    if options is None:
        options = GeneratorOptions()
    elif not isinstance(options, GeneratorOptions):
        options = GeneratorOptions.model_validate(dict(options))

    project_name = _first(
        options.project_name,
        _project_name_from_title(metadata.title),
        DEFAULT_PROJECT_NAME,
    )
    project_version = _first(
        options.project_version, metadata.version, DEFAULT_PROJECT_VERSION
    )
    # Depends on the resolved project name
    project_description = _first(
        options.project_description,
        metadata.description,
        DEFAULT_DESCRIPTION_PREFIX + project_name,
    )
    base_namespace = options.base_namespace or dashize(project_name)

    context = GenerationContext(
        project_name=project_name,
        project_description=escape_text(project_description),
        project_version=project_version,
        project_url=_first(options.project_url, metadata.contact_url),
        license_name=_first(options.project_license_name, metadata.license_name),
        license_url=_first(options.project_license_url, metadata.license_url),
        base_namespace=base_namespace,
        api_package=logical_namespace(base_namespace, API_PACKAGE_SUFFIX),
    )
    logger.debug("Resolved generation context: %s", context)
    return context
