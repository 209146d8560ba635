from typing import Optional

from typelayout import TypeRegistry, Atomic, Struct, Union


# shortcuts to create variants in tests
def atom(representation: int, alignment: int) -> Atomic:
    return Atomic(representation, alignment)


def strc(*members: str) -> Struct:
    return Struct(members)


def uni(*variants: str) -> Union:
    return Union(variants)


def sample_registry() -> TypeRegistry:
    """Registry with the textbook int/char example.

    char is one byte but four-aligned, so placing it before an int costs three
    bytes of padding while placing it after costs nothing.
    """
    registry = TypeRegistry()
    registry.register("int", atom(4, 4))
    registry.register("char", atom(1, 4))
    registry.register("s1", strc("int", "char"))
    registry.register("s2", strc("char", "int"))
    registry.register("u1", uni("int", "int"))
    registry.register("u2", uni("s2", "s1"))
    return registry


class FuzzingConfig:
    def __init__(
            self, *,
            num_types: int = 100,
            type_seed: int = 1,
            max_members: int = 5,
            verbose: bool = False,
            typenames: Optional[str] = None
        ) -> None:
        self.num_types: int = num_types
        self.type_seed: int = type_seed
        self.max_members: int = max_members
        self.verbose: bool = verbose
        self.typenames = None if typenames is None else typenames.split(',')
