#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import os
import sys

from logging import Logger, getLogger
from operator import index
from typing import TYPE_CHECKING, Any, Final

from ._meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

LOGGER: Final[Logger] = getLogger(__name__)


def _getenv_int(name: str, /, default: int | None = None) -> int | None:
    value = os.getenv(name, "").strip()

    if not value:
        return default

    try:
        return int(value, 0)
    except ValueError:
        LOGGER.warning(
            "ignoring %s=%r: not an integer, using %r",
            name,
            value,
            default,
        )

        return default


def _getenv_bounds(
    min_name: str,
    max_name: str,
    /,
) -> tuple[int | None, int | None]:
    min_value = _getenv_int(min_name)
    max_value = _getenv_int(max_name)

    if min_value is not None and max_value is not None:
        if min_value > max_value:
            LOGGER.warning(
                "%s=%d is greater than %s=%d, swapping",
                min_name,
                min_value,
                max_name,
                max_value,
            )

            min_value, max_value = max_value, min_value

    return (min_value, max_value)


_DEFAULT_PRIORITY: Final[int] = _getenv_int("THREADPRIORITY_DEFAULT", 0)

_MIN_PRIORITY: int | None
_MAX_PRIORITY: int | None
_MIN_PRIORITY, _MAX_PRIORITY = _getenv_bounds(
    "THREADPRIORITY_MIN",
    "THREADPRIORITY_MAX",
)


def _coerce(value: object, /) -> int:
    # `bool` implements `__index__`, but `True` is a flag, not a priority
    if isinstance(value, bool):
        msg = "'bool' object cannot be interpreted as a priority"
        raise TypeError(msg)

    try:
        return index(value)
    except TypeError:
        msg = (
            f"{type(value).__name__!r} object cannot be interpreted as"
            " a priority"
        )
        raise TypeError(msg) from None


def _clamp(value: int, /) -> int:
    clamped = value

    if _MIN_PRIORITY is not None and clamped < _MIN_PRIORITY:
        clamped = _MIN_PRIORITY

    if _MAX_PRIORITY is not None and clamped > _MAX_PRIORITY:
        clamped = _MAX_PRIORITY

    if clamped != value:
        LOGGER.debug(
            "priority %d clamped to %d (bounds: %r..%r)",
            value,
            clamped,
            _MIN_PRIORITY,
            _MAX_PRIORITY,
        )

    return clamped


class PriorityAttribute:
    """
    An advisory integer priority owned by exactly one thread.

    The value is always an :class:`int`. Every write goes through the integer
    protocol (:func:`operator.index`), so floats, strings and arbitrary objects
    are rejected with :exc:`TypeError` and leave the stored value untouched.
    :class:`bool` is rejected as well.

    If ``THREADPRIORITY_MIN`` and/or ``THREADPRIORITY_MAX`` environment
    variables are set, stored values are clamped into that inclusive range.

    Example:
      >>> priority = PriorityAttribute(1)
      >>> priority.get()
      1
      >>> priority.set(3)
      3
      >>> priority.set(1.5)
      Traceback (most recent call last):
      TypeError: 'float' object cannot be interpreted as a priority
      >>> priority.get()
      3
    """

    __slots__ = (
        "__weakref__",
        "_value",
    )

    def __new__(cls, /, value: object | DefaultType = DEFAULT) -> Self:
        """..."""

        self = object.__new__(cls)

        if value is DEFAULT:
            self._value = _clamp(_DEFAULT_PRIORITY)
        else:
            self._value = _clamp(_coerce(value))

        return self

    def __reduce__(self, /) -> tuple[Any, ...]:
        """
        Returns a recipe that recreates the attribute with the same value.

        Used by:

        * The :mod:`pickle` module for pickling (all protocols).
        * The :mod:`copy` module for deep copying.
        """

        return (self.__class__, (self._value,))

    def __copy__(self, /) -> Self:
        """..."""

        return self.__class__(self._value)

    def __repr__(self, /) -> str:
        """..."""

        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        return f"{cls_repr}({self._value!r})"

    def __int__(self, /) -> int:
        """..."""

        return self._value

    def __index__(self, /) -> int:
        """
        Returns the current value, which allows passing the attribute itself
        wherever a priority is expected.
        """

        return self._value

    def copy(self, /) -> Self:
        """
        Returns a snapshot: a new attribute with the current value that does
        not follow later changes of this one.
        """

        return self.__copy__()

    def get(self, /) -> int:
        """
        Returns the current value.
        """

        return self._value

    def set(self, /, value: object) -> int:
        """
        Stores *value* and returns it as an :class:`int`.

        Raises:
          TypeError:
            if *value* is not an integer. In that case the stored value is not
            changed.
        """

        value = _coerce(value)

        # a single rebinding of an immutable int is atomic for readers
        self._value = _clamp(value)

        return value
