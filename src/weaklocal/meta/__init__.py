#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements a few metaprogramming helpers that are used for the
library's own needs: singleton markers for parameter defaults, lazy global
rebinding, and export of public names.
"""

from ._exports import (
    export as export,
)
from ._functions import (
    replaces as replaces,
)
from ._imports import (
    import_from as import_from,
)
from ._markers import (
    DEFAULT as DEFAULT,
    MISSING as MISSING,
    DefaultType as DefaultType,
    MissingType as MissingType,
    SingletonEnum as SingletonEnum,
)
