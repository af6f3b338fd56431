#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from itertools import count
from operator import index
from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, Final, NoReturn

from weaklocal.meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    from ._registry import HardReferenceRegistry

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

LOGGER: Final[Logger] = getLogger(__name__)

DEFAULT_PURGE_MULTIPLIER: Final[int] = 20


class PurgeScheduler:
    """
    An amortized trigger for sweeping dead threads out of a registry.

    Every :meth:`tick` decrements a countdown, and the tick that brings it to
    zero sweeps the registry. After a sweep that found *n* live threads, the
    next one happens after ``purge_multiplier * (1 + n)`` ticks, so the cost
    of sweeping amortizes to a constant per tick.

    The countdown is an :func:`itertools.count` iterator, which advances
    atomically, so ticks need no lock. The trigger is approximate: a sweep
    may be delayed, but it is never skipped forever.
    """

    __slots__ = (
        "__weakref__",
        "_countdown",
        "_last_countdown",
        "_multiplier",
        "_registry",
    )

    #: The largest countdown a sweep can schedule.
    MAX_COUNTDOWN: Final[int] = 2**31 - 1
    #: The countdown used instead of one that exceeds :attr:`MAX_COUNTDOWN`.
    OVERFLOW_COUNTDOWN: Final[int] = 1_000_000

    def __new__(
        cls,
        /,
        registry: HardReferenceRegistry[Any],
        purge_multiplier: int | DefaultType = DEFAULT,
    ) -> Self:
        if purge_multiplier is DEFAULT:
            purge_multiplier = DEFAULT_PURGE_MULTIPLIER
        else:
            purge_multiplier = index(purge_multiplier)

            if purge_multiplier < 1:
                msg = "purge_multiplier must be >= 1"
                raise ValueError(msg)

        self = object.__new__(cls)

        self._multiplier = purge_multiplier
        self._registry = registry

        self._reset(purge_multiplier)

        return self

    def __reduce__(self, /) -> NoReturn:
        msg = f"cannot reduce {self!r}"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        object_repr = f"{cls_repr}(purge_multiplier={self._multiplier!r})"

        return f"<{object_repr} at {id(self):#x}>"

    def _reset(self, /, countdown: int) -> None:
        # the tick that fetches zero is the `countdown`-th one
        self._countdown = count(countdown - 1, -1).__next__
        self._last_countdown = countdown

    def _sweep(self, /) -> int:
        countdown = self._last_countdown

        try:
            removed, alive = self._registry.remove_dead()

            countdown = self._multiplier * (1 + alive)

            if countdown > self.MAX_COUNTDOWN:
                countdown = self.OVERFLOW_COUNTDOWN
        finally:
            # a failed sweep must not leave the countdown below zero
            self._reset(countdown)

        if removed:
            LOGGER.debug(
                "Purged %d entries of dead threads (%d alive, next in %d)",
                removed,
                alive,
                countdown,
            )

        return removed

    def tick(self, /) -> bool:
        """
        Count one operation and sweep if the countdown has run out.

        Returns :data:`True` if a sweep was performed.
        """

        if self._countdown():
            return False

        self._sweep()

        return True

    def purge(self, /) -> int:
        """
        Sweep right now and restart the countdown.

        Returns the number of evicted entries.
        """

        return self._sweep()

    @property
    def purge_multiplier(self, /) -> int:
        """
        The number of ticks per live thread between two sweeps.
        """

        return self._multiplier
