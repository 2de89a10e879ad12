#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Advisory thread priorities for Python

This package attaches an integer priority to threads. A new thread inherits
a snapshot of the priority of the thread that creates it, the priority stays
readable and writable before, during and after the thread's life, and every
write is type-checked:

* :class:`Thread` is a :class:`threading.Thread` with a ``priority`` property
* :func:`get_priority` and :func:`set_priority` work on any thread, including
  the main thread and threads created by other libraries
* :class:`PriorityAttribute` is the guarded value itself

Priorities are advisory: nothing here talks to the OS scheduler.
"""

__author__: str = "Ilya Egorov <0x42005e1f@gmail.com>"
__version__: str = "0.1.0"

from ._meta import (
    DEFAULT as DEFAULT,
    DefaultType as DefaultType,
    export as _export,
)
from ._priority import (
    PriorityAttribute as PriorityAttribute,
)
from ._threads import (
    Thread as Thread,
    current_priority as current_priority,
    get_priority as get_priority,
    priority_attribute as priority_attribute,
    set_priority as set_priority,
    spawn as spawn,
)

# prepare for external use
_export(globals())
