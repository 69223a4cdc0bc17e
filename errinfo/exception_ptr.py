"""Copies of exceptions that can be stored, passed between threads and raised again later."""

from __future__ import annotations

import copy
import re
import sys
from typing import Any

from .info import Error, ErrorInfo, define_error_info, error_info_name

__all__ = [
    "ExceptionPtr",
    "UnknownException",
    "OriginalExceptionType",
    "ErrinfoNestedException",
    "copy_exception",
    "make_exception_ptr",
    "current_exception",
    "rethrow_exception",
    "diagnostic_information",
    "to_string",
]

_PADDING = "  "
_LINE_START = re.compile(r"\n(?=[\s\S])")


def _type_name(kind: type) -> str:
    if kind.__module__ == "builtins":
        return kind.__qualname__
    return f"{kind.__module__}.{kind.__qualname__}"


def _clone(exc: BaseException) -> BaseException:
    """Return an independent copy of ``exc``, including its error information."""
    clone = copy.copy(exc)
    if isinstance(exc, Error):
        data = getattr(exc, "_data", None)
        clone._data = None if data is None else data.clone()
    return clone


class ExceptionPtr:
    """A shared handle to a stored exception; empty when it holds none."""

    __slots__ = ("_exc",)

    def __init__(self, exception: BaseException | None = None) -> None:
        if exception is not None and not isinstance(exception, BaseException):
            raise TypeError(f"expected an exception, got {type(exception).__name__}")
        self._exc = exception

    def rethrow(self) -> None:
        """Raise a fresh copy of the stored exception."""
        if self._exc is None:
            raise ValueError("cannot rethrow an empty exception pointer")
        raise _clone(self._exc)

    def __bool__(self) -> bool:
        return self._exc is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExceptionPtr):
            return NotImplemented
        return self._exc is other._exc

    def __hash__(self) -> int:
        return id(self._exc)

    def __copy__(self) -> ExceptionPtr:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> ExceptionPtr:
        return self

    def __repr__(self) -> str:
        if self._exc is None:
            return "ExceptionPtr()"
        return f"ExceptionPtr({self._exc!r})"


class OriginalExceptionType(define_error_info("tag_original_exception_type")):
    """The type of an exception that could not be copied faithfully."""

    __slots__ = ()

    def name_value_string(self) -> str:
        return f"[{error_info_name(self)}] = {_type_name(self.value)}\n"


class ErrinfoNestedException(define_error_info("errinfo_nested_exception_")):
    """An exception pointer attached as the cause of another exception."""

    __slots__ = ()

    def name_value_string(self) -> str:
        return f"[{error_info_name(self)}] = {to_string(self.value)}\n"


class UnknownException(Error):
    """Stands in for an exception that could not be copied."""

    def __init__(self, original: BaseException | None = None) -> None:
        super().__init__()
        if original is not None:
            data = getattr(original, "_data", None) if isinstance(original, Error) else None
            if data is not None:
                self._data = data.clone()
            self.add_info(OriginalExceptionType(type(original)))


def copy_exception(error: BaseException) -> ExceptionPtr:
    """Return a pointer to an independent copy of ``error``."""
    if not isinstance(error, BaseException):
        raise TypeError(f"expected an exception, got {type(error).__name__}")
    return ExceptionPtr(_clone(error))


def make_exception_ptr(error: BaseException) -> ExceptionPtr:
    """Return a pointer to an independent copy of ``error``."""
    return copy_exception(error)


def current_exception() -> ExceptionPtr:
    """Return a pointer to a copy of the exception currently being handled."""
    active = sys.exc_info()[1]
    if active is None:
        raise RuntimeError("no exception is being handled")
    try:
        return copy_exception(active)
    except MemoryError:
        return ExceptionPtr(MemoryError())
    except Exception:
        return ExceptionPtr(UnknownException(active))


def rethrow_exception(ptr: ExceptionPtr) -> None:
    """Raise a copy of the exception held by ``ptr``."""
    if not isinstance(ptr, ExceptionPtr):
        raise TypeError(f"expected an ExceptionPtr, got {type(ptr).__name__}")
    ptr.rethrow()


def _describe(exc: BaseException, verbose: bool) -> str:
    header = ""
    if verbose:
        header += f"Dynamic exception type: {_type_name(type(exc))}\n"
    what = str(exc)
    if what:
        header += f"what: {what}\n"
    data = getattr(exc, "_data", None) if isinstance(exc, Error) else None
    if data is None:
        return header
    return data.diagnostic_information(header)


def diagnostic_information(target: ExceptionPtr | BaseException, verbose: bool = True) -> str:
    """Describe an exception or the exception held by a pointer."""
    if isinstance(target, ExceptionPtr):
        if not target:
            return "<empty>"
        return _describe(target._exc, verbose)
    if isinstance(target, BaseException):
        return _describe(target, verbose)
    raise TypeError(f"cannot describe {type(target).__name__}")


def to_string(ptr: ExceptionPtr) -> str:
    """Describe ``ptr`` on lines of their own, indented for nesting in other output."""
    text = "\n" + diagnostic_information(ptr)
    return _LINE_START.sub("\n" + _PADDING, text)