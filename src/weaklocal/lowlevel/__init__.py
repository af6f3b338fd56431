#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements the building blocks of
:class:`~weaklocal.CloseableLocal`: a weak per-thread slot, a registry of
strong references keyed by thread, and an amortized purge trigger.

You can use its contents to build your own thread-bound containers with
different lifetime rules.
"""

from ._locks import (
    ThreadLock as ThreadLock,
    create_thread_lock as create_thread_lock,
)
from ._purge import (
    DEFAULT_PURGE_MULTIPLIER as DEFAULT_PURGE_MULTIPLIER,
    PurgeScheduler as PurgeScheduler,
)
from ._registry import (
    HardReferenceRegistry as HardReferenceRegistry,
)
from ._slots import (
    WeakSlot as WeakSlot,
)
from ._threads import (
    ThreadLocal as ThreadLocal,
    current_thread as current_thread,
    current_thread_ident as current_thread_ident,
    thread_is_alive as thread_is_alive,
)
