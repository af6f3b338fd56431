#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Generic, NoReturn
from weakref import WeakKeyDictionary

from ._locks import create_thread_lock
from ._threads import thread_is_alive

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if TYPE_CHECKING:
    from threading import Thread

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

_T = TypeVar("_T", default=object)


class HardReferenceRegistry(Generic[_T]):
    """
    A mapping from threads to strongly held values.

    Threads are keyed weakly, so an entry also disappears on its own once its
    thread object is collected. Entries of terminated threads whose objects
    are still referenced elsewhere are only evicted by :meth:`remove_dead`,
    since there is no notification of thread termination to rely on.

    All access is serialized by a single lock. Once closed, the registry
    holds nothing and rejects new entries.
    """

    __slots__ = (
        "__weakref__",
        "_lock",
        "_refs",
    )

    def __new__(cls, /) -> Self:
        self = object.__new__(cls)

        self._lock = create_thread_lock()
        self._refs = WeakKeyDictionary()

        return self

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        refs = self._refs

        if refs is None:
            extra = "closed"
        else:
            extra = f"size={len(refs)}"

        return f"<{cls_repr} object at {id(self):#x} [{extra}]>"

    def __len__(self, /) -> int:
        """
        Returns the number of threads that currently have an entry.
        """

        with self._lock:
            refs = self._refs

            if refs is None:
                return 0

            return len(refs)

    def put(self, /, thread: Thread, value: _T) -> bool:
        """
        Hold *value* strongly on behalf of *thread*, replacing its previous
        value.

        Returns :data:`False` (and holds nothing) if the registry is closed.
        """

        with self._lock:
            refs = self._refs

            if refs is None:
                return False

            refs[thread] = value

        return True

    def discard(self, /, thread: Thread) -> None:
        """
        Drop the entry of *thread*, if any.
        """

        with self._lock:
            refs = self._refs

            if refs is not None:
                refs.pop(thread, None)

    def remove_dead(self, /) -> tuple[int, int]:
        """
        Evict the entries of terminated threads.

        Returns a ``(removed, alive)`` pair: the number of evicted entries and
        the number of entries whose threads are still alive.
        """

        removed = 0
        alive = 0

        with self._lock:
            refs = self._refs

            if refs is None:
                return (removed, alive)

            for thread in list(refs):
                if thread_is_alive(thread):
                    alive += 1
                else:
                    refs.pop(thread, None)
                    removed += 1

        return (removed, alive)

    def close(self, /) -> int:
        """
        Release every held value and reject new ones from now on.

        Returns the number of released entries; zero on repeated calls.
        """

        with self._lock:
            refs = self._refs

            if refs is None:
                return 0

            released = len(refs)

            refs.clear()

            self._refs = None

        return released

    @property
    def closed(self, /) -> bool:
        """
        :data:`True` once :meth:`close` has been called.
        """

        return self._refs is None
