"""Assemble the render plan from a parsed API model.

Pipeline order:

1. resolve the generation context (once, frozen)
2. name operations and map their types; build model specs (in parallel)
3. resolve the output folders
4. lower-case every operation's HTTP method
5. group operations by tag into one API file each, then append the
   supporting files

Per-entity work only reads its own entity and the frozen context, so it runs
in a thread pool. Results are put back in source order before assembly.
Every plan entry owns a deep copy of its context; no two entries share
mutable values.
"""

from __future__ import annotations

import copy
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from .binding import CLOJURE, LanguageBinding
from .metadata import GeneratorOptions, resolve_metadata
from .models import (
    AbstractApiModel,
    GenerationContext,
    ModelDefinition,
    Operation,
    RenderPlanEntry,
)
from .namespace import logical_namespace

logger = logging.getLogger(__name__)

DEFAULT_TAG = "default"
DEFAULT_WORKERS = 4

# Parameter location -> operation context key
_PARAM_GROUPS: dict[str, str] = {
    "path": "path_params",
    "query": "query_params",
    "header": "header_params",
    "formData": "form_params",
    "form": "form_params",
}

T = TypeVar("T")
R = TypeVar("R")


def _ordered_map(
    func: Callable[[T], R], items: Iterable[T], workers: int
) -> list[R]:
    """Apply *func* to every item, possibly in parallel, keeping input order.

    The first exception raised by any call propagates.
    """
    items = list(items)
    if workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [(index, pool.submit(func, item)) for index, item in enumerate(items)]
        results = [(index, future.result()) for index, future in futures]
    results.sort(key=lambda pair: pair[0])
    return [result for _, result in results]


def post_process_operations(operations: list[Operation]) -> list[Operation]:
    """Lower-case the HTTP method of every operation, in place."""
    for operation in operations:
        operation.http_method = operation.http_method.lower()
    return operations


def name_operation(operation: Operation, binding: LanguageBinding) -> Operation:
    """Write target names and type expressions onto *operation*.

    The raw ``id`` and parameter ``name`` fields are left untouched.

    Raises:
        FatalInputError: if the operation id sanitizes to nothing.
    """
    operation.operation_id = binding.to_operation_id(operation.id)
    for param in operation.parameters:
        param.param_name = binding.to_param_name(param.name)
        param.data_type = binding.map_type(param.schema)
    if operation.return_type is not None:
        operation.return_data_type = binding.map_type(operation.return_type)
    return operation


def build_model_context(
    definition: ModelDefinition, binding: LanguageBinding
) -> dict[str, Any]:
    """Build the template context for one named model."""
    name = binding.to_model_name(definition.name)
    return {
        "name": name,
        "base_name": definition.name,
        "spec_name": name + "-spec",
        "description": binding.escape_text(definition.description),
        "properties": [
            {
                "name": binding.to_var_name(prop.name),
                "base_name": prop.name,
                "data_type": binding.map_type(prop.schema),
                "required": prop.required,
                "description": binding.escape_text(prop.description),
            }
            for prop in definition.properties
        ],
    }


def build_operation_context(
    operation: Operation, binding: LanguageBinding
) -> dict[str, Any]:
    """Build the template context for one named, post-processed operation."""
    params: list[dict[str, Any]] = []
    grouped: dict[str, list[dict[str, Any]]] = {
        key: [] for key in dict.fromkeys(_PARAM_GROUPS.values())
    }
    body_param: Optional[dict[str, Any]] = None

    for param in operation.parameters:
        param_ctx = {
            "param_name": param.param_name,
            "base_name": param.name,
            "data_type": param.data_type,
            "location": param.location,
            "required": param.required,
            "description": binding.escape_text(param.description),
        }
        params.append(param_ctx)
        if param.location == "body":
            body_param = param_ctx
        elif param.location in _PARAM_GROUPS:
            grouped[_PARAM_GROUPS[param.location]].append(param_ctx)

    return {
        "operation_id": operation.operation_id,
        "raw_operation_id": operation.id,
        "http_method": operation.http_method,
        "path": operation.path,
        "summary": binding.escape_text(operation.summary),
        "notes": binding.escape_text(operation.notes),
        "return_type": operation.return_data_type,
        "params": params,
        "body_param": body_param,
        **grouped,
    }


def _api_key(tag: str, binding: LanguageBinding) -> str:
    """Return the API name a tag groups under."""
    return binding.to_api_name(binding.sanitize_tag(tag)) or DEFAULT_TAG


def group_operations(
    operations: list[Operation], binding: LanguageBinding
) -> dict[str, dict[str, Any]]:
    """Group operation contexts by API name, in order of first appearance.

    Operations without tags, and tags with nothing left after sanitizing
    (such as ``"2024"``), go to the ``default`` API, whose label is always
    ``default``. An operation with several tags appears in each of their APIs.
    """
    apis: dict[str, dict[str, Any]] = {}
    for operation in operations:
        op_ctx = build_operation_context(operation, binding)
        for tag in operation.tags or [DEFAULT_TAG]:
            key = _api_key(tag, binding)
            if key not in apis:
                label = DEFAULT_TAG if key == DEFAULT_TAG else binding.escape_token(tag)
                apis[key] = {"tag": label, "operations": []}
            apis[key]["operations"].append(op_ctx)
    return apis


def _supporting_entries(
    binding: LanguageBinding,
    base_vars: Mapping[str, Any],
    base_folder: list[str],
) -> list[RenderPlanEntry]:
    entries = []
    for supporting in binding.supporting_files:
        if supporting.in_base_namespace:
            path = (binding.source_folder, *base_folder, supporting.filename)
        else:
            path = (supporting.filename,)
        entries.append(
            RenderPlanEntry(
                template_id=supporting.template_id,
                output_path=path,
                context=copy.deepcopy(dict(base_vars)),
            )
        )
    return entries


def build_render_plan(
    api: AbstractApiModel,
    options: GeneratorOptions | Mapping[str, Any] | None = None,
    binding: LanguageBinding = CLOJURE,
    workers: int = DEFAULT_WORKERS,
) -> list[RenderPlanEntry]:
    """Build the ordered render plan for *api*.

    API entries come first, one per tag in order of first appearance,
    followed by the binding's supporting files.

    Raises:
        FatalInputError: if any operation id sanitizes to nothing. No plan
            is returned in that case.
    """
    context: GenerationContext = resolve_metadata(api.metadata, options)

    operations = _ordered_map(
        lambda op: name_operation(op, binding), api.operations, workers
    )
    models = _ordered_map(
        lambda definition: build_model_context(definition, binding),
        api.definitions,
        workers,
    )

    base_folder = binding.resolve_folder(context.base_namespace)
    api_folder = binding.resolve_folder(context.api_package)

    post_process_operations(operations)
    apis = group_operations(operations, binding)

    api_summaries = [
        {
            "api_name": key,
            "tag": api_ctx["tag"],
            "namespace": logical_namespace(context.api_package, key),
            "filename": binding.to_api_filename(key) + binding.api_file_extension,
        }
        for key, api_ctx in apis.items()
    ]
    base_vars: dict[str, Any] = {
        **context.template_vars(),
        "source_folder": binding.source_folder,
        "apis": api_summaries,
        "models": models,
    }

    plan: list[RenderPlanEntry] = []
    for summary in api_summaries:
        key = summary["api_name"]
        plan.append(
            RenderPlanEntry(
                template_id=binding.api_template_id,
                output_path=(binding.source_folder, *api_folder, summary["filename"]),
                context=copy.deepcopy(
                    {
                        **context.template_vars(),
                        "api_name": key,
                        "tag": summary["tag"],
                        "namespace": summary["namespace"],
                        "operations": apis[key]["operations"],
                    }
                ),
            )
        )
    plan.extend(_supporting_entries(binding, base_vars, base_folder))

    logger.debug(
        "Render plan for %s: %d operations, %d models, %d APIs, %d entries",
        context.project_name,
        len(operations),
        len(models),
        len(apis),
        len(plan),
    )
    return plan
