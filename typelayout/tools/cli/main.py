import sys
import rich_click as click
from rich.console import Console

from .settings import CONTEXT_SETTINGS, COLOR_SYSTEMS, LOG_LEVELS, setup_logging
from .interpreter import Program


color_option = click.option(
    "--color",
    type=click.Choice(COLOR_SYSTEMS),
    default="auto",
    envvar="TYPELAYOUT_COLOR",
    show_envvar=True,
    help="""Force the command to output with/without terminal colors. By default output colours if the terminal supports it.
See the [underline blue][link=https://rich.readthedocs.io/en/stable/console.html#color-systems]Rich documentation[/link][/] for more info on what the options mean.""",
)

log_level_option = click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="TYPELAYOUT_LOG_LEVEL",
    show_envvar=True,
    help="Verbosity of the log written to stderr.",
)


@click.group(context_settings=CONTEXT_SETTINGS)
def cli():
    # Initialize the CLI group
    pass


@click.command(short_help="Define types and inspect their layout interactively")
@color_option
@log_level_option
def repl(color, log_level):
    """Define types and inspect their layout interactively.

    Commands, one per line:

    [bold]atomic[/] NAME SIZE ALIGN, [bold]struct[/] NAME TYPE..., [bold]union[/] NAME TYPE...,
    [bold]describe[/] NAME and [bold]exit[/].
    """
    setup_logging(log_level)
    console = Console(color_system=None if color == "none" else color)
    program = Program(console)

    console.print("[bold green]Type layout simulator[/], run [bold]exit[/] to quit")
    while program.should_run():
        program.run()


@click.command(short_help="Run a script of type definitions and queries")
@click.argument("script", type=click.File("r"))
@click.option(
    "--strict",
    type=bool,
    is_flag=True,
    help="Stop at the first line that fails and exit with status 1.",
)
@color_option
@log_level_option
def run(script, strict, color, log_level):
    """Run a script of type definitions and queries.

    The script holds one command per line, blank lines and lines starting with # are skipped.
    """
    setup_logging(log_level)
    console = Console(color_system=None if color == "none" else color)
    program = Program(console)

    for lineno, line in enumerate(script, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if not program.run_line(line) and strict:
            console.print(f"[bold red]Stopped at line {lineno}[/]")
            sys.exit(1)

        if not program.should_run():
            break


cli.add_command(repl)
cli.add_command(run)

if __name__ == "__main__":
    cli()
