import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import Console

from typelayout.core import TypeRegistry, TypeSystemError
from typelayout.layout import LayoutEngine, LayoutReport
from typelayout.types import Atomic, Struct, Union

from .format import rich_report, rich_error


class CommandError(Exception):
    """Raised when an input line is not a well formed command.

    Attributes
    ----------
    code: int
        One of the class constants that indicates the type of error.
    argument: str, optional
        The offending verb or argument.
    """

    NOT_ENOUGH_ARGS = 1
    TOO_MANY_ARGS = 2
    INVALID_ACTION = 3
    INVALID_ARGUMENT = 4

    error_message_mapping = {
        NOT_ENOUGH_ARGS: ("NOT_ENOUGH_ARGS", "Not enough arguments"),
        TOO_MANY_ARGS: ("TOO_MANY_ARGS", "Too many arguments"),
        INVALID_ACTION: ("INVALID_ACTION", "Not a valid action"),
        INVALID_ARGUMENT: ("INVALID_ARGUMENT", "Not a valid argument"),
    }

    def __init__(self, code: int, argument: Optional[str] = None) -> None:
        self.code = code
        self.argument = argument
        super().__init__(code, argument)

    def __str__(self) -> str:
        symbol, msg = self.error_message_mapping[self.code]
        if self.argument is not None:
            return f"[{symbol}] {msg}: '{self.argument}'"
        return f"[{symbol}] {msg}"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CommandError) and other.code == self.code and other.argument == self.argument

    def __hash__(self) -> int:
        return hash((self.code, self.argument))


@dataclass(frozen=True)
class Exit:
    pass


@dataclass(frozen=True)
class Describe:
    name: str


@dataclass(frozen=True)
class AddAtomic:
    name: str
    representation: int
    alignment: int


@dataclass(frozen=True)
class AddStruct:
    name: str
    members: Tuple[str, ...]


@dataclass(frozen=True)
class AddUnion:
    name: str
    variants: Tuple[str, ...]


def _parse_count(token: str) -> int:
    try:
        value = int(token)
    except ValueError:
        raise CommandError(CommandError.INVALID_ARGUMENT, token) from None
    if value < 0:
        raise CommandError(CommandError.INVALID_ARGUMENT, token)
    return value


def _parse_exit(args: List[str]):
    return Exit()


def _parse_describe(args: List[str]):
    if not args:
        raise CommandError(CommandError.NOT_ENOUGH_ARGS)
    if len(args) > 1:
        raise CommandError(CommandError.TOO_MANY_ARGS)
    return Describe(args[0])


def _parse_atomic(args: List[str]):
    if len(args) < 3:
        raise CommandError(CommandError.NOT_ENOUGH_ARGS)
    if len(args) > 3:
        raise CommandError(CommandError.TOO_MANY_ARGS)
    name, representation, alignment = args
    return AddAtomic(name, _parse_count(representation), _parse_count(alignment))


def _compound_parser(action: Callable) -> Callable:
    def _parse(args: List[str]):
        if not args:
            raise CommandError(CommandError.NOT_ENOUGH_ARGS)
        # An empty member list is left for the registry to reject
        return action(args[0], tuple(args[1:]))
    return _parse


_parsers: Dict[str, Callable] = {
    "exit": _parse_exit,
    "describe": _parse_describe,
    "atomic": _parse_atomic,
    "struct": _compound_parser(AddStruct),
    "union": _compound_parser(AddUnion),
}


def parse(line: str):
    """Turn one line of input into an action, the verb is case insensitive.

    Raises
    ------
    CommandError
        When the line is not a well formed command.
    """
    tokens = line.split()
    if not tokens:
        raise CommandError(CommandError.NOT_ENOUGH_ARGS)

    verb = tokens[0].lower()
    if verb not in _parsers:
        raise CommandError(CommandError.INVALID_ACTION, verb)
    return _parsers[verb](tokens[1:])


class Program:
    """A session of type definitions and layout queries printed to a rich console."""

    def __init__(self, console: Optional[Console] = None, registry: Optional[TypeRegistry] = None) -> None:
        self.console = console or Console()
        self.registry = registry if registry is not None else TypeRegistry()
        self.engine = LayoutEngine(self.registry)
        self.running = True

    def should_run(self) -> bool:
        return self.running

    def execute(self, action) -> Optional[LayoutReport]:
        logging.debug(f"Executing {action}")

        if isinstance(action, Exit):
            self.running = False
        elif isinstance(action, Describe):
            report = self.engine.report(action.name)
            self.console.print(rich_report(report))
            return report
        elif isinstance(action, AddAtomic):
            self.registry.register(action.name, Atomic(action.representation, action.alignment))
        elif isinstance(action, AddStruct):
            self.registry.register(action.name, Struct(action.members))
        elif isinstance(action, AddUnion):
            self.registry.register(action.name, Union(action.variants))
        else:
            raise TypeError(f"Unknown action {action!r}")
        return None

    def run_line(self, line: str) -> bool:
        """Parse and execute a line, errors are printed and do not end the session."""
        try:
            self.execute(parse(line))
        except (CommandError, TypeSystemError) as e:
            logging.info(f"Rejected {line.strip()!r}: {e}")
            self.console.print(rich_error(e))
            return False
        return True

    def run(self, prompt: str = ">> ") -> None:
        """Run one iteration of the read-eval-print loop."""
        try:
            line = self.console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            self.running = False
            return
        self.run_line(line)
