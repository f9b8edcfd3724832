"""Entry point: python -m clientgen SPEC_FILE [OUTPUT_DIR] [-D KEY=VALUE ...]

Reads the API document, builds the render plan and writes the client
library. ``-D`` sets a metadata override (``-D projectName=petstore``).
Templates are read from ``--templates``, $CLIENTGEN_TEMPLATES, or the bundled
default folder.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

import jinja2

from .codegen import TEMPLATE_DIR, generate, make_environment
from .context_builder import build_render_plan
from .errors import GeneratorError
from .loader import load_spec
from .metadata import GeneratorOptions
from .schema_parser import parse_api

logger = logging.getLogger("clientgen")

DEFAULT_OUTPUT_DIR = Path("generated-code") / "clojure"

OPTION_KEYS = sorted(
    field.alias or name for name, field in GeneratorOptions.model_fields.items()
)


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    options: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid option '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if key not in OPTION_KEYS:
            raise argparse.ArgumentTypeError(
                f"unknown option '{key}'. Known options: {', '.join(OPTION_KEYS)}"
            )
        options[key] = value
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clientgen", description="Generate a Clojure client library from an API document"
    )
    parser.add_argument("spec", type=Path, help="Path to the Swagger/OpenAPI JSON document")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for the generated files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-D",
        "--option",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help=f"Metadata override; one of {', '.join(OPTION_KEYS)}",
    )
    parser.add_argument(
        "-t",
        "--templates",
        type=Path,
        default=None,
        help="Template folder (default: $CLIENTGEN_TEMPLATES or the bundled templates)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        overrides = _parse_key_value_pairs(args.option)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    template_dir = args.templates or os.environ.get("CLIENTGEN_TEMPLATES", str(TEMPLATE_DIR))

    try:
        api = parse_api(load_spec(args.spec))
        plan = build_render_plan(api, overrides)
        env = make_environment(jinja2.FileSystemLoader(str(template_dir)))
        generate(plan, args.output, env)
    except GeneratorError as exc:
        logger.error("%s", exc)
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
