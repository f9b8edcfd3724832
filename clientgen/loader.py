"""Load an API document (Swagger 2.0 or OpenAPI 3) from disk.

Reads a JSON file and extracts paths, definitions and the info block.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import SpecLoadError


def load_spec(path: Path | str) -> dict[str, Any]:
    """Load the API document from disk."""
    spec_file = Path(path)
    try:
        with open(spec_file, encoding="utf-8") as f:
            spec = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise SpecLoadError(f"Cannot load API document {spec_file}: {exc}") from exc
    if not isinstance(spec, dict):
        raise SpecLoadError(f"API document {spec_file} is not a JSON object")
    return spec


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths", {})


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract named schemas (``definitions`` or ``components.schemas``)."""
    if "definitions" in spec:
        return spec["definitions"]
    return spec.get("components", {}).get("schemas", {})


def get_info(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract the info block from the spec."""
    return spec.get("info") or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a $ref pointer in the spec."""
    parts = ref.lstrip("#/").split("/")
    node = spec
    for part in parts:
        node = node[part]
    return node


def ref_name(ref: str) -> str:
    """Return the model name a $ref pointer points to."""
    return ref.rsplit("/", 1)[-1]
