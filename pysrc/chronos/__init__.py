from __future__ import annotations

import logging as _logging
from contextlib import contextmanager as _contextmanager
from dataclasses import dataclass as _dataclass
from typing import Iterator as _Iterator

from ._pychronos import *
from ._pychronos import (  # for the docs
    __all__,
    __version__,
    _patch_time_frozen,
    _patch_time_keep_ticking,
    _unpatch_time,
    _unpkl_inst,
)

# The application decides where log records go
_logging.getLogger(__name__).addHandler(_logging.NullHandler())


@_dataclass
class _TimePatch:
    _pin: CalendarInstant
    _keep_ticking: bool

    def shift(self, amount: int, unit: TimeUnit | str) -> None:
        """Move the patched time, using the same semantics as
        :meth:`CalendarInstant.add`"""
        if self._keep_ticking:
            self._pin = new = CalendarInstant.now().add(amount, unit)
            _patch_time_keep_ticking(new)
        else:
            self._pin = new = self._pin.add(amount, unit)
            _patch_time_frozen(new)


@_contextmanager
def patch_current_time(
    inst: CalendarInstant, /, *, keep_ticking: bool
) -> _Iterator[_TimePatch]:
    """Patch the current time to a fixed value (for testing purposes).
    Behaves as a context manager or decorator, with similar semantics to
    ``unittest.mock.patch``.

    Important
    ---------

    * This function should be used only for testing purposes. It is not
      thread-safe or part of the stable API.
    * This function only affects chronos' ``now()`` and everything that
      depends on it (``is_future()``, ``is_today()``, etc.).
      It does not affect the standard library's time functions or any
      other libraries. Use the ``time_machine`` package if you also want
      to patch other libraries.

    Example
    -------
    >>> from chronos import CalendarInstant, patch_current_time
    >>> i = CalendarInstant.from_utc(1980, 3, 2, hour=2)
    >>> with patch_current_time(i, keep_ticking=False) as p:
    ...     assert CalendarInstant.now() == i
    ...     p.shift(4, "hours")
    ...     assert CalendarInstant.now() == i.add_hours(4)
    ...
    >>> assert CalendarInstant.now() != i
    """
    if keep_ticking:
        _patch_time_keep_ticking(inst)
    else:
        _patch_time_frozen(inst)

    try:
        yield _TimePatch(inst, keep_ticking)
    finally:
        _unpatch_time()


__all__ = [*__all__, "patch_current_time"]
