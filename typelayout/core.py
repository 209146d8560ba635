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
import threading
from typing import Dict, Iterator, List, Optional

from .types import Atomic, Struct, Union, Variant, is_variant


class TypeSystemError(Exception):
    """This exception is raised when a type definition or a type reference is not valid.
    Print the exception directly or convert it to string for a detailed description.
    None of these errors are fatal: the registry is never left partially modified.

    Attributes
    ----------
    code: int
        One of the class constants that indicates the type of error.
    name: str, optional
        The missing type name for ``TYPE_DOES_NOT_EXIST``.
    """

    TYPE_REDEFINITION = 1  # Name already registered
    NO_ZERO_SIZED_TYPE = 2  # Atomic without a positive size
    NO_ZERO_ALIGN = 3  # Atomic without a positive alignment
    EMPTY_COMPOUND_TYPE = 4  # Struct or union without members
    TYPE_DOES_NOT_EXIST = 5  # Reference to an unregistered name

    error_message_mapping = {
        TYPE_REDEFINITION: ("TYPE_REDEFINITION", "An existing type cannot be redefined"),
        NO_ZERO_SIZED_TYPE: ("NO_ZERO_SIZED_TYPE", "Types of size 0 are not allowed"),
        NO_ZERO_ALIGN: ("NO_ZERO_ALIGN", "Aligning to 0 is not allowed"),
        EMPTY_COMPOUND_TYPE: ("EMPTY_COMPOUND_TYPE", "Empty compound types are not allowed"),
        TYPE_DOES_NOT_EXIST: ("TYPE_DOES_NOT_EXIST", "The symbol does not exist"),
    }

    def __init__(self, code: int, name: Optional[str] = None) -> None:
        """Initialize a TypeSystemError. Code should be one of the class constants."""
        self.code = code
        self.name = name
        super().__init__(code, name)

    def __str__(self) -> str:
        if self.code not in self.error_message_mapping:
            return f"[TypeSystemError] Got an unexpected error code '{self.code}'."
        symbol, msg = self.error_message_mapping[self.code]
        if self.name is not None:
            return f"[{symbol}] {msg}: '{self.name}'"
        return f"[{symbol}] {msg}"

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TypeSystemError) and other.code == self.code and other.name == self.name

    def __hash__(self) -> int:
        return hash((self.code, self.name))


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

class TypeRegistry:
    """
    Insert-only mapping from type name to type definition. Definitions reference
    each other by name only, every name referenced from a registered definition is
    itself registered, and a definition never changes once it is registered.

    Examples
    --------
    >>> registry = TypeRegistry()
    >>> registry.register("int", Atomic(4, 4))
    >>> registry.register("pair", Struct(["int", "int"]))
    >>> registry.lookup("pair")
    Struct[int, int]
    """

    def __init__(self) -> None:
        self._types: Dict[str, Variant] = {}
        self._lock = threading.RLock()
        self._engine = None

    def register(self, name: str, variant: Variant) -> None:
        """Validate and store a new type definition.

        Parameters
        ----------
        name: str
            The name the definition is stored under, it must not be in use.
        variant: Atomic, Struct or Union
            The definition itself.

        Raises
        ------
        TypeSystemError
            When the definition is not valid, the registry is left unchanged.
        TypeError
            When variant is not a type definition or an atomic holds non integer values.
        """
        if not is_variant(variant):
            raise TypeError(f"Expected an Atomic, Struct or Union, got {variant!r}.")
        if isinstance(variant, Atomic) and not (_is_integer(variant.representation) and _is_integer(variant.alignment)):
            raise TypeError(f"Atomic size and alignment must be integers, got {variant!r}.")

        with self._lock:
            self._check_new_type(name, variant)
            self._types[name] = variant

        logging.debug(f"Registered type {name} = {variant!r}")

    def _check_new_type(self, name: str, variant: Variant) -> None:
        if name in self._types:
            raise TypeSystemError(TypeSystemError.TYPE_REDEFINITION)

        if isinstance(variant, Atomic):
            if variant.representation <= 0:
                raise TypeSystemError(TypeSystemError.NO_ZERO_SIZED_TYPE)
            if variant.alignment <= 0:
                raise TypeSystemError(TypeSystemError.NO_ZERO_ALIGN)
            return

        # The empty check comes first so it never depends on name resolution
        if not variant.references:
            raise TypeSystemError(TypeSystemError.EMPTY_COMPOUND_TYPE)

        for ref in variant.references:
            if ref not in self._types:
                raise TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, ref)

    def lookup(self, name: str) -> Optional[Variant]:
        """The definition registered under name, or None. Never raises."""
        with self._lock:
            return self._types.get(name)

    def resolve(self, name: str) -> Variant:
        """The definition registered under name.

        Raises
        ------
        TypeSystemError
            With code ``TYPE_DOES_NOT_EXIST`` if the name is not registered.
        """
        variant = self.lookup(name)
        if variant is None:
            raise TypeSystemError(TypeSystemError.TYPE_DOES_NOT_EXIST, name)
        return variant

    def describe(self, name: str) -> str:
        """Human readable layout report of a registered type.

        Raises
        ------
        TypeSystemError
            With code ``TYPE_DOES_NOT_EXIST`` if the name is not registered.
        """
        if self._engine is None:
            from .layout import LayoutEngine
            self._engine = LayoutEngine(self)
        return str(self._engine.report(name))

    def names(self) -> List[str]:
        with self._lock:
            return list(self._types)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._types

    def __len__(self) -> int:
        with self._lock:
            return len(self._types)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"TypeRegistry({', '.join(self.names())})"


__all__ = ["TypeSystemError", "TypeRegistry", "Atomic", "Struct", "Union"]
