#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2024 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from typing import TYPE_CHECKING

from wrapt import when_imported

from weaklocal._monkey import import_original
from weaklocal.meta import replaces

if TYPE_CHECKING:
    from threading import Thread

# third-party patchers can break the original objects from the threading
# module, so we need to use the _thread module in the first place

current_thread_ident = import_original("_thread", "get_ident")

ThreadLocal = import_original("_thread", "_local")


def _current_python_thread() -> Thread | None:
    import threading

    _active = threading._active

    @replaces(globals())
    def _current_python_thread():
        return _active.get(current_thread_ident())

    return _current_python_thread()


def _current_eventlet_thread() -> Thread | None:
    return None


@when_imported("eventlet.patcher")
def _(_):
    @replaces(globals())
    def _current_eventlet_thread():
        from eventlet.patcher import original

        _active = original("threading")._active

        @replaces(globals())
        def _current_eventlet_thread():
            return _active.get(current_thread_ident())

        return _current_eventlet_thread()


def _current_foreign_thread() -> Thread:
    global _current_foreign_thread

    # registers a dummy thread object for threads not started by threading
    _current_foreign_thread = import_original("threading", "current_thread")

    return _current_foreign_thread()


def current_thread() -> Thread:
    """
    Return the :class:`threading.Thread` object of the current OS thread.

    Unlike :func:`threading.current_thread`, never returns a greenlet-bound
    dummy when the threading module is monkey-patched.
    """

    thread = _current_python_thread()

    if thread is None:
        thread = _current_eventlet_thread()

        if thread is None:
            thread = _current_foreign_thread()

    return thread


def thread_is_alive(thread: Thread, /) -> bool:
    """
    Return :data:`True` if *thread* has not terminated yet.
    """

    return thread.is_alive()
