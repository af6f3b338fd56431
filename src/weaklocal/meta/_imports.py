#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from importlib import import_module
from types import ModuleType


def import_from(module: ModuleType | str, name: str, /) -> object:
    """
    Return the object *name* of *module*, importing the module by its name if
    a string is given.

    Unlike a plain :func:`getattr`, a missing name raises the same error as
    the ``from module import name`` statement does.

    Raises:
      ImportError:
        if *name* is not in the module.

    Example:
      >>> import_from('threading', 'Thread').__name__
      'Thread'
      >>> import_from('sys', 'circus')
      Traceback (most recent call last):
      ImportError: cannot import name 'circus' from 'sys' (...)
    """

    if not isinstance(module, ModuleType):
        module = import_module(module)

    try:
        return getattr(module, name)
    except AttributeError:
        pass

    module_name = module.__name__
    module_path = getattr(module, "__file__", None)

    msg = (
        f"cannot import name {name!r} from {module_name!r}"
        f" ({module_path or 'unknown location'})"
    )
    raise ImportError(msg, name=module_name, path=module_path)
