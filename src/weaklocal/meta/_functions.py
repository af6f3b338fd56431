#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, TypeVar

    if sys.version_info >= (3, 9):  # PEP 585
        from collections.abc import Callable, MutableMapping
    else:
        from typing import Callable, MutableMapping

    _CallableT = TypeVar("_CallableT", bound=Callable[..., Any])


def replaces(
    namespace: MutableMapping[str, object],
    /,
) -> Callable[[_CallableT], _CallableT]:
    """
    Return a decorator that rebinds the function of the same name in
    *namespace* to the decorated one.

    Used for lazy initialization: a module-level function does its setup on
    the first call and then replaces itself with the fast path.

    Raises:
      LookupError:
        if there is no function of the same name in *namespace*.

    Example:
      >>> def resolve():
      ...     @replaces(globals())
      ...     def resolve():
      ...         return 'fast path'
      ...     return 'slow path'
      >>> resolve()
      'slow path'
      >>> resolve()
      'fast path'
    """

    def decorator(replacer):
        name = replacer.__name__

        if name not in namespace:
            owner = namespace.get("__name__", "namespace")

            msg = f"{owner!r} has no function {name!r}"
            raise LookupError(msg)

        namespace[name] = replacer

        return replacer

    return decorator
