#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from weaklocal._monkey import import_original

# third-party patchers can break the original objects from the threading
# module, so we need to use the _thread module in the first place

ThreadLock = import_original("_thread", "LockType")

create_thread_lock = import_original("_thread", "allocate_lock")
