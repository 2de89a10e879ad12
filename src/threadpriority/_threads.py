#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys
import threading

from _thread import allocate_lock
from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, Final
from weakref import WeakKeyDictionary

from ._meta import DEFAULT, DefaultType
from ._priority import PriorityAttribute

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable, Iterable, Mapping
    else:
        from typing import Callable, Iterable, Mapping

LOGGER: Final[Logger] = getLogger(__name__)

# attributes of threads that were not created by this module
_foreign_attributes: WeakKeyDictionary[threading.Thread, PriorityAttribute]
_foreign_attributes = WeakKeyDictionary()
_foreign_attributes_lock = allocate_lock()


class Thread(threading.Thread):
    """
    A :class:`threading.Thread` with an advisory integer priority.

    Unless *priority* is passed, the thread takes a snapshot of the priority
    of *parent* at creation time. *parent* defaults to the current thread, so
    the usual case is "inherit from whoever creates the thread". Later changes
    to the parent's priority do not affect already created threads.

    Only threads created through this class (or :func:`spawn`) inherit.
    Plain :class:`threading.Thread` objects and executor workers have no
    known creator and start with the default priority
    (``THREADPRIORITY_DEFAULT``, ``0`` unless configured).

    The :attr:`priority` property can be read and assigned at any moment of
    the thread's life, including before :meth:`start` and after it has
    terminated.

    Example:
      >>> set_priority(None, 2)  # the current thread
      2
      >>> thread = Thread(target=lambda: None)
      >>> thread.priority
      2
      >>> thread.start()
      >>> thread.join()
      >>> thread.priority = 3  # still works after death
      >>> thread.priority
      3
    """

    def __init__(
        self,
        /,
        group: None = None,
        target: Callable[..., object] | None = None,
        name: str | None = None,
        args: Iterable[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
        *,
        daemon: bool | None = None,
        priority: object | DefaultType = DEFAULT,
        parent: threading.Thread | DefaultType = DEFAULT,
    ) -> None:
        """..."""

        if priority is DEFAULT:
            if parent is DEFAULT:
                parent = threading.current_thread()

            attribute = priority_attribute(parent).copy()
        else:
            if parent is not DEFAULT:
                msg = "'priority' and 'parent' are mutually exclusive"
                raise TypeError(msg)

            attribute = PriorityAttribute(priority)

        super().__init__(group, target, name, args, kwargs, daemon=daemon)

        self._priority = attribute

        if priority is DEFAULT:
            LOGGER.debug(
                "%r inherited priority %d from %r",
                self,
                attribute.get(),
                parent,
            )

    @property
    def priority(self, /) -> int:
        """
        The current priority of the thread. Always an :class:`int`.

        Assigning a non-integer raises :exc:`TypeError` and leaves the
        priority unchanged.
        """

        return self._priority.get()

    @priority.setter
    def priority(self, /, value: object) -> None:
        self._priority.set(value)


def priority_attribute(thread: threading.Thread, /) -> PriorityAttribute:
    """
    Returns the priority attribute owned by *thread*.

    Threads that were not created via :class:`Thread` (the main thread,
    executor workers, plain :class:`threading.Thread` objects) get their
    attribute on first access, with the default priority. It lives as long as
    the thread object does.
    """

    if isinstance(thread, Thread):
        return thread._priority

    if not isinstance(thread, threading.Thread):
        msg = (
            f"expected a thread, got {type(thread).__name__!r} object"
        )
        raise TypeError(msg)

    attribute = _foreign_attributes.get(thread)

    if attribute is None:
        with _foreign_attributes_lock:
            attribute = _foreign_attributes.get(thread)

            if attribute is None:
                attribute = PriorityAttribute()

                _foreign_attributes[thread] = attribute

                LOGGER.debug(
                    "%r got default priority %d",
                    thread,
                    attribute.get(),
                )

    return attribute


def get_priority(thread: threading.Thread | None = None, /) -> int:
    """
    Returns the priority of *thread* (the current thread if :data:`None`).

    A thread that was not created via :class:`Thread` or :func:`spawn` does
    not inherit its creator's priority: on first access it gets the default
    priority (``THREADPRIORITY_DEFAULT``, ``0`` unless configured).
    """

    if thread is None:
        thread = threading.current_thread()

    return priority_attribute(thread).get()


def set_priority(thread: threading.Thread | None, value: object, /) -> int:
    """
    Sets the priority of *thread* (the current thread if :data:`None`) and
    returns *value* as an :class:`int`.

    Works regardless of whether *thread* has started or has already
    terminated. Any thread may change the priority of any other thread.

    Raises:
      TypeError:
        if *value* is not an integer. The priority is not changed.
    """

    if thread is None:
        thread = threading.current_thread()

    return priority_attribute(thread).set(value)


def current_priority() -> int:
    """
    Returns the priority of the current thread.
    """

    return priority_attribute(threading.current_thread()).get()


def spawn(
    target: Callable[..., object],
    /,
    *args: Any,
    name: str | None = None,
    daemon: bool | None = None,
    priority: object | DefaultType = DEFAULT,
    parent: threading.Thread | DefaultType = DEFAULT,
    **kwargs: Any,
) -> Thread:
    """
    Creates a :class:`Thread` that runs ``target(*args, **kwargs)``, starts
    it, and returns it.
    """

    thread = Thread(
        target=target,
        name=name,
        args=args,
        kwargs=kwargs,
        daemon=daemon,
        priority=priority,
        parent=parent,
    )
    thread.start()

    return thread
