"""Client-library generator: turns a parsed API description into a render plan."""

from .context_builder import build_render_plan
from .errors import FatalInputError, GeneratorError
from .metadata import GeneratorOptions, resolve_metadata
from .schema_parser import parse_api

__all__ = [
    "FatalInputError",
    "GeneratorError",
    "GeneratorOptions",
    "build_render_plan",
    "parse_api",
    "resolve_metadata",
]
