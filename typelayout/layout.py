"""
 * Copyright(c) 2021 to 2022 ZettaScale Technology and others
 *
 * This program and the accompanying materials are made available under the
 * terms of the Eclipse Public License v. 2.0 which is available at
 * http://www.eclipse.org/legal/epl-2.0, or the Eclipse Distribution License
 * v. 1.0 which is available at
 * http://www.eclipse.org/org/documents/edl-v10.php.
 *
 * SPDX-License-Identifier: EPL-2.0 OR BSD-3-Clause
"""

import logging
from enum import Enum
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, TYPE_CHECKING

from .core import TypeSystemError
from .types import Atomic, Struct, Union, Variant
from .util import lcm, permutations


if TYPE_CHECKING:
    from .core import TypeRegistry


class PackingMode(Enum):
    Unpacked = "unpacked"
    Packed = "packed"
    Optimized = "optimized"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Order in which modes are listed in a report
REPORT_ORDER = (PackingMode.Optimized, PackingMode.Unpacked, PackingMode.Packed)


def padded_size(layouts: Iterable[Tuple[int, int]]) -> int:
    """Place (size, alignment) pairs one after the other, padding each to its alignment.
    There is no trailing padding: the result is the end offset of the last element."""
    offset = 0
    for size, align in layouts:
        if offset % align != 0:
            offset += align - offset % align
        offset += size
    return offset


class LayoutStrategy:
    """Given a registry, compute size and alignment of types under one packing mode"""
    mode: Optional[PackingMode] = None

    def __init__(self, registry: 'TypeRegistry') -> None:
        self.registry = registry
        self._members: Dict[str, Tuple[int, int]] = {}

    def size(self, variant: Variant) -> int:
        if isinstance(variant, Atomic):
            return variant.representation
        elif isinstance(variant, Struct):
            return self.struct_size(self._not_empty(variant))
        elif isinstance(variant, Union):
            return self.union_size(self._not_empty(variant))
        raise TypeError(f"Expected an Atomic, Struct or Union, got {variant!r}.")

    def align(self, variant: Variant) -> int:
        if isinstance(variant, Atomic):
            return variant.alignment
        elif isinstance(variant, Struct):
            return self.struct_align(self._not_empty(variant))
        elif isinstance(variant, Union):
            return self.union_align(self._not_empty(variant))
        raise TypeError(f"Expected an Atomic, Struct or Union, got {variant!r}.")

    @staticmethod
    def _not_empty(variant):
        # Unregistered variants skip the registry checks
        if not variant.references:
            raise TypeSystemError(TypeSystemError.EMPTY_COMPOUND_TYPE)
        return variant

    def member(self, name: str) -> Tuple[int, int]:
        # Registered definitions never change, so a result stays valid forever
        if name not in self._members:
            variant = self.registry.resolve(name)
            self._members[name] = (self.size(variant), self.align(variant))
        return self._members[name]

    def member_size(self, name: str) -> int:
        return self.member(name)[0]

    def member_align(self, name: str) -> int:
        return self.member(name)[1]

    def struct_size(self, struct: Struct) -> int:
        """Size of a struct with at least one member, implemented by every packing mode."""
        raise NotImplementedError()

    def struct_align(self, struct: Struct) -> int:
        """Alignment of a struct with at least one member, implemented by every packing mode."""
        raise NotImplementedError()

    def union_size(self, union: Union) -> int:
        return max(self.member_size(name) for name in union.variants)

    def union_align(self, union: Union) -> int:
        # Pairwise fold over adjacent variants, a lone variant has no pair and aligns to 1
        aligns = [self.member_align(name) for name in union.variants]
        alignment = 1
        for left, right in zip(aligns, aligns[1:]):
            alignment = lcm(alignment, lcm(left, right))
        return alignment

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.mode.value})"


class UnpackedLayout(LayoutStrategy):
    """Natural layout: members in declaration order, each padded to its alignment."""
    mode = PackingMode.Unpacked

    def struct_size(self, struct: Struct) -> int:
        return padded_size(self.member(name) for name in struct.members)

    def struct_align(self, struct: Struct) -> int:
        # A struct aligns like its first member, not like its most aligned one
        return self.member_align(struct.members[0])


class PackedLayout(LayoutStrategy):
    """No padding at all, member order is irrelevant to the size."""
    mode = PackingMode.Packed

    def struct_size(self, struct: Struct) -> int:
        return sum(self.member_size(name) for name in struct.members)

    def struct_align(self, struct: Struct) -> int:
        return self.member_align(struct.members[0])


class OptimizedLayout(LayoutStrategy):
    """Natural layout of the member ordering that wastes the least space."""
    mode = PackingMode.Optimized

    def __init__(self, registry: 'TypeRegistry') -> None:
        super().__init__(registry)
        self._optimal: Dict[Struct, Tuple[Tuple[str, ...], int]] = {}

    def optimal_layout(self, struct: Struct) -> Tuple[Tuple[str, ...], int]:
        """Search all member orderings for the smallest padded size.

        Every one of the ``n!`` orderings is tried, so this is only practical
        for structs with a handful of members. On a tie the ordering that comes
        first in lexicographic index order wins.

        Parameters
        ----------
        struct: Struct
            The struct to lay out, its members must be registered.

        Returns
        -------
        Tuple[Tuple[str, ...], int]
            The winning ordering of member names and its size.
        """
        if struct in self._optimal:
            return self._optimal[struct]

        layouts = [self.member(name) for name in struct.members]
        best_order, best_size = None, None

        for order in permutations(range(len(layouts))):
            size = padded_size(layouts[i] for i in order)
            if best_size is None or size < best_size:
                best_order, best_size = order, size

        ordering = tuple(struct.members[i] for i in best_order)
        logging.debug(f"Optimal ordering of {struct!r} is {ordering} with size {best_size}")

        self._optimal[struct] = (ordering, best_size)
        return ordering, best_size

    def struct_size(self, struct: Struct) -> int:
        return self.optimal_layout(struct)[1]

    def struct_align(self, struct: Struct) -> int:
        ordering, _ = self.optimal_layout(struct)
        return self.member_align(ordering[0])


_strategy_mapping = {
    PackingMode.Unpacked: UnpackedLayout,
    PackingMode.Packed: PackedLayout,
    PackingMode.Optimized: OptimizedLayout,
}


@dataclass(frozen=True)
class ModeLayout:
    size: int
    alignment: int
    loss: int


@dataclass
class LayoutReport:
    """Size, alignment and padding loss of one type under every packing mode.

    Attributes
    ----------
    name: str
        The registered type name.
    kind: str
        One of ``"atomic"``, ``"struct"`` or ``"union"``.
    modes: Dict[PackingMode, ModeLayout]
        The layout for each packing mode.
    ordering: Tuple[str, ...], optional
        The member ordering chosen by the optimized layout, only set for structs.
    """
    name: str
    kind: str
    modes: Dict[PackingMode, ModeLayout]
    ordering: Optional[Tuple[str, ...]] = None

    def __getitem__(self, mode: PackingMode) -> ModeLayout:
        return self.modes[mode]

    def __str__(self) -> str:
        lines = [f"Symbol: {self.name}", f"{self.kind.capitalize()}:"]
        for mode in REPORT_ORDER:
            layout = self.modes[mode]
            lines += [
                f"   * {mode.label}:",
                f"      + Size: {layout.size}",
                f"      + Alignment: {layout.alignment}",
                f"      + Loss: {layout.loss}"
            ]
            if mode == PackingMode.Optimized and self.ordering is not None:
                lines.append(f"      + Ordering: {', '.join(self.ordering)}")
        return "\n".join(lines)

    def __rich_repr__(self):
        yield "name", self.name
        yield "kind", self.kind
        for mode in REPORT_ORDER:
            yield mode.value, self.modes[mode]
        if self.ordering is not None:
            yield "ordering", self.ordering


class LayoutEngine:
    """
    Computes layouts of the types in a registry under all three packing modes.
    Member names are resolved through the registry, recursing under the same
    packing mode until atomic types are reached.

    Examples
    --------
    >>> engine = LayoutEngine(registry)
    >>> engine.size(registry.resolve("s2"), PackingMode.Unpacked)
    8
    """

    def __init__(self, registry: 'TypeRegistry') -> None:
        self.registry = registry
        self._strategies: Dict[PackingMode, LayoutStrategy] = {
            mode: cls(registry) for mode, cls in _strategy_mapping.items()
        }

    def strategy(self, mode: PackingMode) -> LayoutStrategy:
        return self._strategies[mode]

    def size(self, variant: Variant, mode: PackingMode) -> int:
        return self._strategies[mode].size(variant)

    def align(self, variant: Variant, mode: PackingMode) -> int:
        return self._strategies[mode].align(variant)

    def loss(self, variant: Variant, mode: PackingMode) -> int:
        """Bytes lost to padding under mode compared to the fully packed layout.

        For a union the reference is the best packed variant among the ones that
        reach the union's size under mode.
        """
        strategy = self._strategies[mode]
        packed = self._strategies[PackingMode.Packed]
        size = strategy.size(variant)

        if isinstance(variant, Union):
            return size - max(
                packed.member_size(name)
                for name in variant.variants
                if strategy.member_size(name) == size
            )
        return size - packed.size(variant)

    def layout(self, variant: Variant, mode: PackingMode) -> ModeLayout:
        return ModeLayout(
            size=self.size(variant, mode),
            alignment=self.align(variant, mode),
            loss=self.loss(variant, mode)
        )

    def optimal_layout(self, name: str) -> Tuple[Tuple[str, ...], int]:
        variant = self.registry.resolve(name)
        if not isinstance(variant, Struct):
            raise TypeError(f"Only structs have a member ordering, {name} is {variant!r}.")
        return self._strategies[PackingMode.Optimized].optimal_layout(variant)

    def report(self, name: str) -> LayoutReport:
        """Look up a registered type and lay it out under every packing mode.

        Raises
        ------
        TypeSystemError
            With code ``TYPE_DOES_NOT_EXIST`` if the name is not registered.
        """
        variant = self.registry.resolve(name)
        return LayoutReport(
            name=name,
            kind=variant.kind,
            modes={mode: self.layout(variant, mode) for mode in PackingMode},
            ordering=self.optimal_layout(name)[0] if isinstance(variant, Struct) else None
        )


__all__ = [
    "PackingMode", "LayoutStrategy", "UnpackedLayout", "PackedLayout", "OptimizedLayout",
    "ModeLayout", "LayoutReport", "LayoutEngine", "padded_size"
]
