"""Per-language capability set used by the render-plan pipeline.

The pipeline in :mod:`clientgen.context_builder` only talks to a
:class:`LanguageBinding`. Each target ecosystem provides one instance; any
single function can be swapped with :func:`dataclasses.replace`::

    binding = dataclasses.replace(CLOJURE, source_folder="lib")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from . import metadata, namespace, naming, type_mapper
from .models import SchemaType


@dataclass(frozen=True)
class SupportingFile:
    """A fixed output file.

    With ``in_base_namespace`` set, the file lands in the physical folder of
    the base namespace below the source folder; otherwise at the root.
    """

    template_id: str
    filename: str
    in_base_namespace: bool = False


@dataclass(frozen=True)
class LanguageBinding:
    name: str
    map_type: Callable[[SchemaType], str]
    to_operation_id: Callable[[str], str]
    to_var_name: Callable[[str], str]
    to_param_name: Callable[[str], str]
    to_model_name: Callable[[str], str]
    to_api_name: Callable[[str], str]
    to_api_filename: Callable[[str], str]
    sanitize_tag: Callable[[str], str]
    resolve_folder: Callable[[str], list[str]]
    escape_text: Callable[[Optional[str]], Optional[str]]
    escape_token: Callable[[str], str]
    api_template_id: str
    api_file_extension: str
    supporting_files: tuple[SupportingFile, ...] = ()
    source_folder: str = "src"


CLOJURE = LanguageBinding(
    name="clojure",
    map_type=type_mapper.map_type,
    to_operation_id=naming.to_operation_id,
    to_var_name=naming.to_var_name,
    to_param_name=naming.to_param_name,
    to_model_name=naming.to_model_name,
    to_api_name=naming.to_api_name,
    to_api_filename=naming.to_api_filename,
    sanitize_tag=naming.sanitize_tag,
    resolve_folder=namespace.resolve_folder,
    escape_text=metadata.escape_text,
    escape_token=metadata.escape_token,
    api_template_id="api.clj.j2",
    api_file_extension=".clj",
    supporting_files=(
        SupportingFile("project.clj.j2", "project.clj"),
        SupportingFile("core.clj.j2", "core.clj", in_base_namespace=True),
        SupportingFile("specs.clj.j2", "specs.clj", in_base_namespace=True),
        SupportingFile("git_push.sh.j2", "git_push.sh"),
        SupportingFile("gitignore.j2", ".gitignore"),
    ),
)
