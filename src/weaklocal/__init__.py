#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Closeable thread-local storage for Python

This package provides a thread-local value container whose values can be
released for all threads at once, instead of lingering until each thread
terminates. It is meant for long-lived processes, such as thread pools, that
create and discard many such containers over their lifetime:

* values are stored per thread, like :class:`threading.local`
* a single :meth:`~CloseableLocal.close` call drops every thread's value
* values of terminated threads are swept out at an amortized constant cost
"""

__author__ = "Ilya Egorov <0x42005e1f@gmail.com>"
__version__ = "0.1.0"
__version_tuple__ = (0, 1, 0)

from . import (  # noqa: F401
    lowlevel,
    meta,
)
from ._local import (
    CloseableLocal as CloseableLocal,
    LocalClosedError as LocalClosedError,
)

# prepare for external use
meta.export(globals())
