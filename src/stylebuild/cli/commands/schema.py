"""stylebuild schema command - Export JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path

import click

from stylebuild.cli.output import error, success


@click.group()
def schema() -> None:
    """Manage JSON Schema for IDE support.

    **Commands:**

    - `stylebuild schema export` - Export the stylebuild.yaml JSON Schema
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/stylebuild.schema.json",
    help="Output path [default: ./schemas/stylebuild.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export BuildConfig JSON Schema.

    Examples:

        stylebuild schema export

        stylebuild schema export --output custom/path/schema.json
    """
    from stylebuild.config import BuildConfig

    output = Path(output_path)
    json_schema = BuildConfig.model_json_schema()
    json_schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    json_schema["title"] = "stylebuild.yaml"

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(json_schema, indent=2))
    except PermissionError:
        error(f"Cannot write to: {output_path}")
        raise SystemExit(2) from None

    success(f"Schema exported to {output}")
