#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from logging import Logger, getLogger
from typing import TYPE_CHECKING, Final, Generic, NoReturn

from .lowlevel import (
    HardReferenceRegistry,
    PurgeScheduler,
    WeakSlot,
    current_thread,
)
from .meta import DEFAULT, MISSING, DefaultType, MissingType

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    from types import TracebackType

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

LOGGER: Final[Logger] = getLogger(__name__)

_T = TypeVar("_T", default=object)
_D = TypeVar("_D")


class LocalClosedError(RuntimeError):
    """
    Raised on an attempt to use a :class:`CloseableLocal` that has been
    closed.
    """


class CloseableLocal(Generic[_T]):
    """
    A thread-local value that can be released for all threads at once.

    The standard :class:`threading.local` keeps a value alive until the
    thread that stored it terminates, or until the local itself is collected,
    whichever comes first. In a long-lived thread pool, both can take a long
    time. This class stores only weak references in the thread-local storage
    and keeps the values alive through a separate registry of strong
    references, one per thread. :meth:`close` clears that registry, so the
    values of all threads become collectable immediately (unless something
    else still refers to them).

    Entries of threads that have terminated are swept out of the registry
    every so often, at an amortized constant cost per operation (see
    :class:`~weaklocal.lowlevel.PurgeScheduler`).

    Do not call :meth:`close` until all threads are done with the instance:
    any further operation raises :exc:`LocalClosedError`.

    Example:
      >>> local = CloseableLocal(default_factory=list)
      >>> local.get()
      []
      >>> local.set(['value'])
      >>> local.get()
      ['value']
      >>> local.close()
      >>> local.get()
      Traceback (most recent call last):
      weaklocal.LocalClosedError: operation on a closed local
    """

    __slots__ = (
        "__weakref__",
        "_default_factory",
        "_registry",
        "_scheduler",
        "_slot",
    )

    def __new__(
        cls,
        /,
        default_factory: Callable[[], _T] | MissingType = MISSING,
        *,
        purge_multiplier: int | DefaultType = DEFAULT,
    ) -> Self:
        """
        Create a new open local.

        *default_factory*, if given, is called by :meth:`get` in a thread that
        has no value yet; its result is stored and returned. Subclasses can
        override :meth:`initial_value` instead.

        *purge_multiplier* is the number of operations per live thread
        between two sweeps of dead threads (``20`` by default). It must be a
        positive integer.
        """

        self = object.__new__(cls)

        self._default_factory = default_factory

        self._registry = HardReferenceRegistry()
        self._scheduler = PurgeScheduler(self._registry, purge_multiplier)
        self._slot = WeakSlot()

        return self

    def __reduce__(self, /) -> NoReturn:
        """
        Disables pickling and copying: per-thread values cannot be moved
        between processes or duplicated meaningfully.
        """

        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        """..."""

        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        purge_multiplier = self._scheduler.purge_multiplier

        object_repr = f"{cls_repr}(purge_multiplier={purge_multiplier!r})"

        if self._registry.closed:
            extra = "closed"
        else:
            extra = "open"

        return f"<{object_repr} at {id(self):#x} [{extra}]>"

    def __enter__(self, /) -> Self:
        """..."""

        return self

    def __exit__(
        self,
        /,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """
        Closes the local.
        """

        self.close()

    def _check_open(self, /) -> None:
        if self._registry.closed:
            msg = "operation on a closed local"
            raise LocalClosedError(msg)

    def initial_value(self, /) -> _T | MissingType:
        """
        Return the value for a thread that has none yet, or
        :data:`~weaklocal.meta.MISSING` if there is no such value.

        The default implementation calls the *default_factory* passed to the
        constructor. Exceptions propagate to the caller of :meth:`get`.
        """

        default_factory = self._default_factory

        if default_factory is MISSING:
            return MISSING

        return default_factory()

    @overload
    def get(self, /, default: None = None) -> _T | None: ...
    @overload
    def get(self, /, default: _D) -> _T | _D: ...
    def get(self, /, default=None):
        """
        Return the value of the current thread.

        If the current thread has never set a value, :meth:`initial_value` is
        consulted; a value it returns is stored as if by :meth:`set`.
        Otherwise, *default* is returned.

        *default* is also returned if the stored value has already been
        collected, which can happen when another thread closes the local
        concurrently. The two cases cannot be told apart.

        Raises:
          LocalClosedError:
            if the local is closed.

        Example:
          >>> local = CloseableLocal()
          >>> local.get() is None
          True
          >>> local.get('default')
          'default'
        """

        self._check_open()

        slot = self._slot

        if not slot.is_bound():
            value = self.initial_value()

            if value is MISSING:
                return default

            self.set(value)

            return value

        self._scheduler.tick()

        return slot.get(default)

    def set(self, /, value: _T) -> None:
        """
        Bind *value* to the current thread.

        The value is held strongly for as long as the current thread is alive
        and the local is open.

        Raises:
          LocalClosedError:
            if the local is closed.
        """

        self._check_open()

        slot = self._slot

        box = slot.set(value)

        if not self._registry.put(current_thread(), box):
            slot.clear()  # closed concurrently

            msg = "operation on a closed local"
            raise LocalClosedError(msg)

        self._scheduler.tick()

    def purge(self, /) -> int:
        """
        Evict the values of terminated threads right now.

        Returns the number of evicted values.

        Raises:
          LocalClosedError:
            if the local is closed.
        """

        self._check_open()

        return self._scheduler.purge()

    def close(self, /) -> None:
        """
        Release the values of all threads.

        The binding of the current thread is removed immediately; the bindings
        of other threads become empty as soon as their values are collected.
        Repeated calls do nothing.
        """

        released = self._registry.close()

        self._slot.clear()

        if released:
            LOGGER.debug("Released %d values of %r", released, self)

    @property
    def closed(self, /) -> bool:
        """
        :data:`True` once :meth:`close` has been called.
        """

        return self._registry.closed

    @property
    def purge_multiplier(self, /) -> int:
        """
        The number of operations per live thread between two sweeps.
        """

        return self._scheduler.purge_multiplier
