#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys
import weakref

from typing import TYPE_CHECKING, Generic, NoReturn

from ._threads import ThreadLocal

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if sys.version_info >= (3, 11):
    from typing import final, overload
else:
    from typing_extensions import final, overload

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_T = TypeVar("_T", default=object)
_D = TypeVar("_D")


@final
class _ValueBox(Generic[_T]):
    # Most builtin values cannot be weakly referenced, so the slot refers to
    # a box instead. Only the registry keeps the box alive.

    __slots__ = (
        "__weakref__",
        "value",
    )

    def __init__(self, /, value: _T) -> None:
        self.value = value

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        return f"<{cls_repr} object at {id(self):#x}>"


class WeakSlot(Generic[_T]):
    """
    A per-thread storage primitive that refers to its values weakly.

    Each thread sees only its own binding, so no synchronization is needed.
    The slot never keeps a value alive by itself: :meth:`set` returns the box
    that carries the value, and whoever wants the value to survive must hold
    that box strongly.

    Example:
      >>> slot = WeakSlot()
      >>> slot.is_bound()
      False
      >>> box = slot.set('value')
      >>> slot.get()
      'value'
      >>> del box  # nothing else holds the box
      >>> slot.is_bound(), slot.get()
      (True, None)
    """

    __slots__ = (
        "__weakref__",
        "_local",
    )

    def __new__(cls, /) -> Self:
        self = object.__new__(cls)

        self._local = ThreadLocal()

        return self

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self.is_bound():
            extra = "bound"
        else:
            extra = "unbound"

        return f"<{cls_repr} object at {id(self):#x} [{extra}]>"

    def is_bound(self, /) -> bool:
        """
        Return :data:`True` if the current thread has called :meth:`set` and
        has not called :meth:`clear` since then.

        The bound value may have been collected already.
        """

        return hasattr(self._local, "ref")

    @overload
    def get(self, /, default: None = None) -> _T | None: ...
    @overload
    def get(self, /, default: _D) -> _T | _D: ...
    def get(self, /, default=None):
        """
        Return the current thread's value, or *default* if the slot is unbound
        in this thread or the value has been collected.
        """

        try:
            ref = self._local.ref
        except AttributeError:
            return default

        box = ref()

        if box is None:
            return default

        return box.value

    def set(self, /, value: _T) -> _ValueBox[_T]:
        """
        Bind *value* to the current thread, replacing the previous binding.

        Returns the box that carries *value*; the binding lives exactly as
        long as the box does.
        """

        box = _ValueBox(value)

        self._local.ref = weakref.ref(box)

        return box

    def clear(self, /) -> None:
        """
        Remove the current thread's binding, if any.
        """

        try:
            del self._local.ref
        except AttributeError:
            pass
