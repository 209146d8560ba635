"""
 * Copyright(c) 2021 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause
"""

import typing as _typing
from dataclasses import dataclass


@dataclass(frozen=True)
class Atomic:
    """A leaf type with a stored size (``representation``) and alignment, both in bytes."""
    representation: int
    alignment: int

    kind: _typing.ClassVar[str] = "atomic"

    def __repr__(self) -> str:
        return f"Atomic[{self.representation}, {self.alignment}]"

    def __rich_repr__(self):
        yield "representation", self.representation
        yield "alignment", self.alignment


@dataclass(frozen=True, init=False)
class Struct:
    """Members laid out in declaration order, referenced by type name."""
    members: _typing.Tuple[str, ...]

    kind: _typing.ClassVar[str] = "struct"

    def __init__(self, members: _typing.Iterable[str]) -> None:
        object.__setattr__(self, "members", tuple(members))

    def __repr__(self) -> str:
        return f"Struct[{', '.join(self.members)}]"

    def __rich_repr__(self):
        yield from self.members

    @property
    def references(self) -> _typing.Tuple[str, ...]:
        return self.members


@dataclass(frozen=True, init=False)
class Union:
    """Mutually exclusive alternatives, referenced by type name."""
    variants: _typing.Tuple[str, ...]

    kind: _typing.ClassVar[str] = "union"

    def __init__(self, variants: _typing.Iterable[str]) -> None:
        object.__setattr__(self, "variants", tuple(variants))

    def __repr__(self) -> str:
        return f"Union[{', '.join(self.variants)}]"

    def __rich_repr__(self):
        yield from self.variants

    @property
    def references(self) -> _typing.Tuple[str, ...]:
        return self.variants


Variant = _typing.Union[Atomic, Struct, Union]


def is_variant(obj: object) -> bool:
    return isinstance(obj, (Atomic, Struct, Union))


__all__ = ["Atomic", "Struct", "Union", "Variant", "is_variant"]
