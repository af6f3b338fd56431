#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from wrapt import when_imported

from weaklocal.meta import import_from, replaces

# Both eventlet and gevent replace thread primitives in place. Their patchers
# are only consulted once they have been imported by someone else; until then
# nothing can be patched and the stdlib objects are the originals.


def _eventlet_patched(module_name: str, /) -> bool:
    return False


@when_imported("eventlet.patcher")
def _(_):
    @replaces(globals())
    def _eventlet_patched(module_name, /):
        from eventlet.patcher import already_patched

        # eventlet tracks both thread modules under a single key
        keys = {"_thread": "thread", "threading": "thread"}

        @replaces(globals())
        def _eventlet_patched(module_name, /):
            return keys.get(module_name, module_name) in already_patched

        return _eventlet_patched(module_name)


def _gevent_patched(module_name: str, /) -> bool:
    return False


@when_imported("gevent.monkey")
def _(_):
    @replaces(globals())
    def _gevent_patched(module_name, /):
        from gevent.monkey import is_module_patched

        @replaces(globals())
        def _gevent_patched(module_name, /):
            return is_module_patched(module_name)

        return _gevent_patched(module_name)


def _eventlet_original(module_name: str, name: str, /) -> object:
    from eventlet.patcher import original

    return import_from(original(module_name), name)


def _gevent_original(module_name: str, name: str, /) -> object:
    from gevent.monkey import get_original, is_object_patched

    if is_object_patched(module_name, name):
        return get_original(module_name, name)

    return import_from(module_name, name)


def _original(module_name: str, name: str, /) -> object | None:
    if _eventlet_patched(module_name):
        return _eventlet_original(module_name, name)

    if _gevent_patched(module_name):
        return _gevent_original(module_name, name)

    return None


def import_original(module_name: str, name: str, /) -> object:
    """
    Return the object *name* of *module_name* as it was before any monkey
    patching by eventlet or gevent.
    """

    value = _original(module_name, name)

    if value is None:
        value = import_from(module_name, name)

        # the import itself may have applied the patches
        patched_value = _original(module_name, name)

        if patched_value is not None:
            value = patched_value

    return value
