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

from typelayout import TypeRegistry, LayoutEngine, PackingMode, Atomic, Struct, Union


# Every type lives in a registry, members refer to types by name
registry = TypeRegistry()
registry.register("int", Atomic(4, 4))
registry.register("char", Atomic(1, 4))
registry.register("short", Atomic(2, 2))

# In C this would be "struct header { char c; int i; short s; };"
registry.register("header", Struct(["char", "int", "short"]))
registry.register("either", Union(["header", "int"]))

# The engine computes layouts on demand and remembers them
engine = LayoutEngine(registry)

header = registry.resolve("header")
for mode in PackingMode:
    print(f"{mode.label:>10}: size {engine.size(header, mode)}, "
          f"alignment {engine.align(header, mode)}, loss {engine.loss(header, mode)}")

# The ordering that wastes the least space
ordering, size = engine.optimal_layout("header")
print(f"Reordered as {', '.join(ordering)} it takes {size} bytes")

# The same report the command line prints for "describe either"
print(registry.describe("either"))
