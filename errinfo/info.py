"""Typed diagnostic values that can be attached to exceptions after they are created."""

from __future__ import annotations

import copy
from typing import Any, Iterator

__all__ = [
    "ErrorInfo",
    "ErrinfoFileName",
    "ErrorInfoContainer",
    "Error",
    "define_error_info",
    "set_info",
    "get_error_info",
    "error_info_name",
    "to_string",
]


class ErrorInfo:
    """A value tagged with the kind of information it carries.

    Concrete kinds are made with :func:`define_error_info`; each kind is a
    distinct subclass, and an exception holds at most one value per kind.
    """

    __slots__ = ("value",)
    tag: str | None = None

    def __init__(self, value: Any) -> None:
        if type(self).tag is None:
            raise TypeError("ErrorInfo must be specialised with define_error_info()")
        self.value = value

    def name_value_string(self) -> str:
        """Return the line describing this value in diagnostic output."""
        return to_string(self)

    def __copy__(self) -> ErrorInfo:
        return type(self)(copy.copy(self.value))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


def define_error_info(tag: str) -> type[ErrorInfo]:
    """Create a new kind of error information identified by ``tag``."""
    if not isinstance(tag, str):
        raise TypeError("tag must be a string")
    if not tag:
        raise ValueError("tag must not be empty")
    name = tag if tag.isidentifier() else "ErrorInfo"
    return type(name, (ErrorInfo,), {"__slots__": (), "tag": tag, "__qualname__": name})


ErrinfoFileName = define_error_info("errinfo_file_name_")


class ErrorInfoContainer:
    """Holds one value per kind of error information."""

    def __init__(self) -> None:
        self._info: dict[type[ErrorInfo], ErrorInfo] = {}
        self._diagnostic = ""

    def set(self, info: ErrorInfo) -> None:
        """Store ``info``, replacing any earlier value of the same kind."""
        if not isinstance(info, ErrorInfo):
            raise TypeError(f"expected an ErrorInfo, got {type(info).__name__}")
        self._info[type(info)] = info
        self._diagnostic = ""

    def get(self, info_type: type[ErrorInfo]) -> ErrorInfo | None:
        """Return the stored value of kind ``info_type``, or None."""
        return self._info.get(info_type)

    def diagnostic_information(self, header: str | None) -> str:
        """Rebuild the description when ``header`` is given; return the last one built."""
        if header is not None:
            self._diagnostic = header + "".join(
                info.name_value_string() for info in self._info.values()
            )
        return self._diagnostic

    def clone(self) -> ErrorInfoContainer:
        """Return an independent container holding copies of every value."""
        other = ErrorInfoContainer()
        other._info = {kind: copy.copy(info) for kind, info in self._info.items()}
        return other

    def __iter__(self) -> Iterator[ErrorInfo]:
        return iter(list(self._info.values()))

    def __len__(self) -> int:
        return len(self._info)


class Error(Exception):
    """Base exception that can carry any number of typed error information values."""

    def __init__(self, *args: Any) -> None:
        super().__init__(*args)
        self._data: ErrorInfoContainer | None = None

    def add_info(self, *args: ErrorInfo | tuple) -> Error:
        """Attach each value; tuples of values are attached element by element."""
        for item in args:
            if isinstance(item, ErrorInfo):
                set_info(self, item)
            elif isinstance(item, tuple):
                self.add_info(*item)
            else:
                raise TypeError(f"cannot attach {type(item).__name__} to an exception")
        return self

    def __lshift__(self, info: ErrorInfo | tuple) -> Error:
        return self.add_info(info)


def set_info(error: Error, info: ErrorInfo) -> Error:
    """Store a copy of ``info`` in ``error`` and return ``error``."""
    if not isinstance(error, Error):
        raise TypeError(f"{type(error).__name__} cannot carry error information")
    if not isinstance(info, ErrorInfo):
        raise TypeError(f"expected an ErrorInfo, got {type(info).__name__}")
    stored = copy.copy(info)
    container = getattr(error, "_data", None)
    if container is None:
        container = ErrorInfoContainer()
        error._data = container
    container.set(stored)
    return error


def get_error_info(error: BaseException, info_type: type[ErrorInfo]) -> Any:
    """Return the value of kind ``info_type`` held by ``error``, or None."""
    if not (isinstance(info_type, type) and issubclass(info_type, ErrorInfo)):
        raise TypeError("info_type must be a kind of ErrorInfo")
    container = getattr(error, "_data", None) if isinstance(error, Error) else None
    if container is None:
        return None
    info = container.get(info_type)
    return None if info is None else info.value


def error_info_name(info: ErrorInfo | type[ErrorInfo]) -> str:
    """Return the tag naming the kind of ``info``."""
    kind = info if isinstance(info, type) else type(info)
    if not issubclass(kind, ErrorInfo) or kind.tag is None:
        raise TypeError("expected a kind of ErrorInfo")
    return kind.tag


def to_string(info: ErrorInfo) -> str:
    """Format ``info`` as ``[tag] = value`` followed by a newline."""
    return f"[{error_info_name(info)}] = {info.value}\n"