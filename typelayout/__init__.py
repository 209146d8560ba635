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

from . import util, types, core, layout
from .types import Atomic, Struct, Union
from .core import TypeRegistry, TypeSystemError
from .layout import LayoutEngine, LayoutReport, PackingMode

__all__ = [
    "util",
    "types",
    "core",
    "layout",
    "Atomic",
    "Struct",
    "Union",
    "TypeRegistry",
    "TypeSystemError",
    "LayoutEngine",
    "LayoutReport",
    "PackingMode",
]
