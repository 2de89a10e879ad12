#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from types import FunctionType, ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final, NoReturn

    if sys.version_info >= (3, 9):  # PEP 585
        from collections.abc import MutableMapping
    else:
        from typing import MutableMapping

    if sys.version_info >= (3, 11):
        from typing import Literal, Never
    else:
        from typing_extensions import Literal, Never

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:
    from typing_extensions import final


@final
class DefaultType(enum.Enum):
    """
    A singleton class for :data:`DEFAULT`; mimics :data:`~types.NoneType`.
    """

    DEFAULT = object()

    def __init_subclass__(cls, /, **kwargs: Never) -> NoReturn:
        msg = "type 'threadpriority.DefaultType' is not an acceptable base type"
        raise TypeError(msg)

    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __bool__(self, /) -> Literal[False]:
        return False


DEFAULT: Final[Literal[DefaultType.DEFAULT]] = DefaultType.DEFAULT


def _issubmodule(module_name: str | None, package_name: str, /) -> bool:
    return module_name is not None and (
        module_name == package_name
        or module_name.startswith(f"{package_name}.")
    )


def _export_one(package_name: str, name: str, value: object, /) -> None:
    if isinstance(value, type):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        for attr_name, attr_value in {**vars(value)}.items():
            if attr_name.startswith("_"):
                continue

            if isinstance(attr_value, property):
                for func in (attr_value.fget, attr_value.fset):
                    if func is not None:
                        func.__qualname__ = f"{name}.{attr_name}"
                        func.__module__ = package_name
            elif isinstance(attr_value, FunctionType):
                attr_value.__qualname__ = f"{name}.{attr_name}"
                attr_value.__module__ = package_name

        value.__qualname__ = name
        value.__module__ = package_name
    elif isinstance(value, FunctionType):
        if not _issubmodule(value.__module__, package_name):
            return  # skip foreign ones

        value.__qualname__ = name
        value.__module__ = package_name


def export(package_namespace: MutableMapping[str, object], /) -> None:
    """
    Prepare *package_namespace* for external use.

    Every public class and function that is defined in a non-public submodule
    gets its ``__module__`` and ``__qualname__`` updated so that it looks as if
    it was defined directly in the package. This keeps representations short
    and pickling stable across internal reorganizations. A sorted
    ``__all__`` is built from the public names.

    Typically, the usage is as follows: ``export(globals())`` near the end of
    ``__init__.py``.
    """

    if TYPE_CHECKING:
        return

    package_name = package_namespace["__name__"]

    public_names = []

    for name, value in {**package_namespace}.items():
        if name.startswith("_") or isinstance(value, ModuleType):
            continue

        public_names.append(name)

        _export_one(package_name, name, value)

    public_names.sort()
    public_names.sort(key=str.isupper, reverse=True)

    package_namespace.setdefault("__all__", tuple(public_names))
