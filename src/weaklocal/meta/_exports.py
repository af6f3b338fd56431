#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from types import FunctionType, ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):  # PEP 585
        from collections.abc import MutableMapping
    else:
        from typing import MutableMapping


def _relocate(value: object, package_name: str, qualname: str, /) -> None:
    if not isinstance(value, (type, FunctionType)):
        return

    module_name = value.__module__

    # re-exported foreign objects keep their identity
    if module_name != package_name and not module_name.startswith(
        f"{package_name}."
    ):
        return

    if isinstance(value, type):
        for attr_name, attr_value in list(vars(value).items()):
            if not attr_name.startswith("_"):
                _relocate(attr_value, package_name, f"{qualname}.{attr_name}")

    value.__qualname__ = qualname
    value.__module__ = package_name


def export(namespace: MutableMapping[str, object], /) -> None:
    """
    Make the public classes and functions of a package look as if they were
    defined in the package itself, so that their representations do not
    depend on the private submodules they live in. Public subpackages are
    processed too, and each namespace gets a sorted ``__all__`` with
    constants first.

    Call as ``export(globals())`` at the end of ``__init__.py``.
    """

    if TYPE_CHECKING:
        return

    package_name = namespace["__name__"]
    public_names = []

    for name, value in list(namespace.items()):
        if name.startswith("_"):
            continue

        if isinstance(value, ModuleType):
            if value.__name__ == f"{package_name}.{name}":
                export(vars(value))
        else:
            public_names.append(name)

            _relocate(value, package_name, name)

    public_names.sort()
    public_names.sort(key=str.isupper, reverse=True)

    namespace.setdefault("__all__", tuple(public_names))
