"""Opening files with failures reported as exceptions carrying error information."""

from __future__ import annotations

import errno
from typing import IO, Any

from .info import ErrinfoFileName, Error, define_error_info

__all__ = ["FileOpenError", "ErrinfoApiFunction", "ErrinfoErrno", "file_open"]

ErrinfoApiFunction = define_error_info("errinfo_api_function_")
ErrinfoErrno = define_error_info("errinfo_errno_")


class FileOpenError(Error):
    """Raised when a file cannot be opened."""


def file_open(name: str, mode: str) -> IO[Any]:
    """Open ``name`` with ``mode``; on failure raise FileOpenError with details attached."""
    try:
        return open(name, mode)
    except OSError as exc:
        code = exc.errno
        cause: Exception = exc
    except ValueError as exc:
        code = errno.EINVAL
        cause = exc
    raise FileOpenError() << ErrinfoFileName(name) << (
        ErrinfoApiFunction("fopen"),
        ErrinfoErrno(code),
    ) from cause