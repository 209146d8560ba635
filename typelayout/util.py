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

from typing import List, Sequence, TypeVar


T = TypeVar('T')


def gcd(x: int, y: int) -> int:
    """Greatest common divisor of two non-negative numbers, Euclid style.

    A zero argument is allowed: ``gcd(0, y)`` is ``y`` and ``gcd(x, 0)`` is ``x``.

    Examples
    --------
    >>> gcd(3, 9)
    3

    Parameters
    ----------
        x: int
        y: int

    Returns
    -------
    int
        The greatest common divisor of x and y.
    """
    while y:
        x, y = y, x % y
    return x


def lcm(x: int, y: int) -> int:
    """Least common multiple of two non-negative numbers.

    Parameters
    ----------
        x: int
        y: int

    Returns
    -------
    int
        The least common multiple of x and y.

    Raises
    ------
    ValueError
        If both x and y are zero, the least common multiple is undefined.
    """
    if x == 0 and y == 0:
        raise ValueError("The least common multiple of 0 and 0 is undefined.")
    return x * y // gcd(x, y)


def permutations(sequence: Sequence[T]) -> List[List[T]]:
    """Every ordering of a sequence, lexicographic over index positions.

    Orderings are produced by backtracking: a position is fixed by trying each
    element that is still unused in index order, the remainder is permuted
    recursively and the choice is undone. An empty input has no orderings
    at all, so ``permutations([])`` is ``[]`` and not ``[[]]``.

    Examples
    --------
    >>> permutations("ab")
    [['a', 'b'], ['b', 'a']]

    Parameters
    ----------
    sequence: Sequence[T]
        Elements to order, they need not be distinct or hashable.

    Returns
    -------
    List[List[T]]
        All ``len(sequence)!`` orderings.
    """
    items = list(sequence)
    result: List[List[T]] = []
    if not items:
        return result

    used = [False] * len(items)
    current: List[T] = []

    def _fill() -> None:
        if len(current) == len(items):
            result.append(list(current))
            return

        for i, item in enumerate(items):
            if used[i]:
                continue
            used[i] = True
            current.append(item)
            _fill()
            current.pop()
            used[i] = False

    _fill()
    return result
