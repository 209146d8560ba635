import logging
import rich_click as click


click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.COMMAND_GROUPS = {
    "typelayout": [
        {
            "name": "Interactive",
            "commands": ["repl"],
        },
        {
            "name": "Batch",
            "commands": ["run"],
        },
    ]
}

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])

COLOR_SYSTEMS = ["auto", "standard", "256", "truecolor", "windows", "none"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMAT = '%(asctime)s [%(levelname)s] [%(filename)s:%(lineno)s] %(message)s'


def setup_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
