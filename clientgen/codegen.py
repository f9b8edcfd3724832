"""Render templates and write generated output.

Takes the render plan from context_builder and writes one file per entry
below the output directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from .models import RenderPlanEntry

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "clojure"


def make_environment(loader: jinja2.BaseLoader | None = None) -> jinja2.Environment:
    """Create the Jinja2 environment used for every plan entry."""
    return jinja2.Environment(
        loader=loader or jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_plan(
    plan: list[RenderPlanEntry], env: jinja2.Environment
) -> dict[str, str]:
    """Render every entry, keyed by relative output path, in plan order."""
    rendered: dict[str, str] = {}
    for entry in plan:
        template = env.get_template(entry.template_id)
        rendered[entry.relative_path] = template.render(**entry.context)
    return rendered


def generate(
    plan: list[RenderPlanEntry],
    output_dir: Path,
    env: jinja2.Environment | None = None,
) -> list[Path]:
    """Render the plan and write the files below *output_dir*."""
    rendered = render_plan(plan, env or make_environment())

    written: list[Path] = []
    for relative_path, text in rendered.items():
        output_path = output_dir / relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text)
        written.append(output_path)

    logger.info("Generated %d files in %s", len(written), output_dir)
    return written
