"""CLI entry point for stylebuild.

Defines the main CLI group. Each command module is imported only when
that command is needed; invoking `stylebuild` without a command runs
`stylebuild styles` with the default settings.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from stylebuild import __version__
from stylebuild.cli.output import use_plain_output

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

COMMANDS_PACKAGE = "stylebuild.cli.commands"
COMMAND_NAMES = ("schema", "styles", "watch")
DEFAULT_COMMAND = "styles"


class StylebuildGroup(rclick.RichGroup):
    """Command group that imports each command module on first use.

    Command ``name`` lives in ``stylebuild.cli.commands.<name>`` as an
    attribute of the same name. Invoked without a command, the group
    runs DEFAULT_COMMAND.
    """

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *COMMAND_NAMES})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None or cmd_name not in COMMAND_NAMES:
            return cmd
        module = importlib.import_module(f"{COMMANDS_PACKAGE}.{cmd_name}")
        return getattr(module, cmd_name)  # type: ignore[no-any-return]

    def invoke_default(self, ctx: click.Context) -> Any:
        """Run the default command with its option defaults."""
        command = self.get_command(ctx, DEFAULT_COMMAND)
        assert command is not None
        return ctx.invoke(command)


@click.command(cls=StylebuildGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="stylebuild")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: use_plain_output() if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log every compiled file.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """stylebuild - compile SCSS into minified CSS.

    **Getting Started:**

    - `stylebuild` - Build `src/scss/*.scss` into `assets/css`
    - `stylebuild watch` - Build, then rebuild on every change
    - `stylebuild schema export` - Export JSON Schema for stylebuild.yaml
    """
    from stylebuild.cli import output
    from stylebuild.observability import configure_logging

    configure_logging(verbose=verbose, colors=not output.console.no_color)

    if ctx.invoked_subcommand is None:
        ctx.command.invoke_default(ctx)  # type: ignore[attr-defined]


if __name__ == "__main__":
    cli()
