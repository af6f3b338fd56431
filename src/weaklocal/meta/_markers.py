#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from inspect import ismemberdescriptor
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final, NoReturn

if sys.version_info >= (3, 11):  # `EnumMeta` has been renamed to `EnumType`
    from enum import EnumType
else:
    from enum import EnumMeta as EnumType

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):  # a caching bug fix
        from typing import Literal
    else:  # typing-extensions>=4.6.0
        from typing_extensions import Literal

    if sys.version_info >= (3, 11):  # python/cpython#90633
        from typing import Never
    else:  # typing-extensions>=4.1.0
        from typing_extensions import Never

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:  # typing-extensions>=4.1.0
    from typing_extensions import final

# Markers are enum members so that type checkers can narrow `x is MISSING`
# checks on parameters with marker defaults (see PEP 484, "Support for
# singleton types in unions").


class _SingletonMeta(EnumType):
    # to allow `type(SINGLETON)() is SINGLETON`
    def __call__(cls, /, *args, **kwargs):
        if len(cls) != 1 or args or kwargs:
            return super().__call__(*args, **kwargs)

        return super().__call__(next(iter(cls)).value)


class SingletonEnum(enum.Enum, metaclass=_SingletonMeta):
    """
    A base class for singleton classes whose only instance is defined at the
    module level.

    Unlike :class:`enum.Enum`, it prohibits setting attributes that are not
    declared via :ref:`slots`.

    Example:
      >>> class SentinelType(SingletonEnum):
      ...     SENTINEL = 'SENTINEL'
      >>> SENTINEL = SentinelType.SENTINEL
      >>> SentinelType() is SENTINEL
      True
      >>> SENTINEL.attr = 42
      Traceback (most recent call last):
      AttributeError: 'SentinelType' object has no attribute 'attr'
    """

    def __setattr__(self, /, name: str, value: object) -> None:
        if name.startswith("_") and name.endswith("_"):  # used by `enum.Enum`
            super().__setattr__(name, value)
            return

        cls = self.__class__

        if ismemberdescriptor(getattr(cls, name, None)):
            super().__setattr__(name, value)
            return

        msg = f"{cls.__qualname__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __str__(self, /) -> str:  # overridden by `enum.Enum`
        return f"{self.__class__.__module__}.{self._name_}"


def _reject_subclassing(bcs: type, /) -> NoReturn:
    bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

    msg = f"type '{bcs_repr}' is not an acceptable base type"
    raise TypeError(msg)


@final
class DefaultType(SingletonEnum):
    """
    A singleton class for :data:`DEFAULT`; mimics :data:`~types.NoneType`.

    Selects the documented default of a parameter.
    """

    DEFAULT = object()

    def __init_subclass__(cls, /, **kwargs: Never) -> NoReturn:
        _reject_subclassing(__class__)

    def __bool__(self, /) -> Literal[False]:
        return False


@final
class MissingType(SingletonEnum):
    """
    A singleton class for :data:`MISSING`; mimics :data:`~types.NoneType`.

    Marks the absence of a value where :data:`None` is a valid value.
    """

    MISSING = object()

    def __init_subclass__(cls, /, **kwargs: Never) -> NoReturn:
        _reject_subclassing(__class__)

    def __bool__(self, /) -> Literal[False]:
        return False


DEFAULT: Final[Literal[DefaultType.DEFAULT]] = DefaultType.DEFAULT
MISSING: Final[Literal[MissingType.MISSING]] = MissingType.MISSING
