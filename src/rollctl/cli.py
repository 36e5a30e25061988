"""Entry point for the ``roll`` command."""

from __future__ import annotations

import click

from rollctl import __version__
from rollctl.commands._base import RollCommand

# Expressions such as "-1d4" look like short options; pass them through.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
}


@click.command(
    "roll",
    cls=RollCommand,
    context_settings=CONTEXT_SETTINGS,
    examples="""\
  roll 1d20
  roll 3d20 + 5 - 1d4
  roll 2d6 1d8 - 2
  roll -1d4 + 10""",
)
@click.version_option(version=__version__, prog_name="rollctl")
@click.argument("expression", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, expression: tuple[str, ...]) -> None:
    """Roll dice written in standard notation, e.g. 3d20 + 5 - 1d4.

    \b
    Input is any number of terms separated by + or -.
    A term is either a constant (any whole number) or a dice throw.
    A dice throw is written NdS: roll N dice with S sides each.
    Use a lowercase d.
    A term without a sign is positive; terms may be negative.
    Dice throws must be separated: 3d33d3 and 3dd3 are rejected.

    Seed, dice limit and output format are read from ROLLCTL_* environment
    variables or a rollctl.toml file.
    """
    if not expression:
        click.echo(ctx.get_help())
        return

    from rollctl.commands._context import AppContext
    from rollctl.config.settings import RollSettings
    from rollctl.services.roll import RollService

    app = AppContext(RollSettings.load())
    app.emit(RollService(app.settings).roll(" ".join(expression)))
