"""Typed, tagged diagnostic information for exceptions, file opening that reports it, and copyable exception pointers."""

__version__ = "0.1.0"
__all__ = ["info", "fileio", "exception_ptr"]