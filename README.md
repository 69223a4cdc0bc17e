# errinfo

`errinfo` lets you attach typed, tagged pieces of diagnostic data to
exceptions at any point while they travel up the stack. It can also
capture an exception as a value, so that you can hand it to another
thread and raise a copy of it there.

It has no dependencies beyond the standard library and needs Python 3.10
or later.

## Installation

```
pip install errinfo
```

## Attaching information to errors (`errinfo.info`)

Define a kind of information with `define_error_info(tag)`. Each call
returns a new subclass of `ErrorInfo`; the tag names it in diagnostic
output. Derive your exceptions from `Error` and attach values with `<<`
or `add_info`:

```python
from errinfo.info import Error, define_error_info, get_error_info

Answer = define_error_info("answer")

class MyError(Error):
    pass

try:
    raise MyError() << Answer(42)
except MyError as e:
    assert get_error_info(e, Answer) == 42
```

- An exception holds at most one value per kind; attaching the same kind
  again replaces the earlier value.
- What is stored is a copy of the `ErrorInfo` you pass in.
- `get_error_info(error, kind)` returns the value, or `None` when no value
  of that kind is attached or the exception is not an `Error`.
- `add_info(*args)` attaches several values at once; a tuple of values is
  attached element by element, so groups of information that always
  travel together can be kept in one tuple. `<<` accepts a single value
  or such a tuple. Anything else raises `TypeError`.
- `set_info(error, info)` is the function form of attaching one value.

Information can be added while an exception is on its way up:

```python
from errinfo.info import ErrinfoFileName

try:
    do_work()
except Error as e:
    e << ErrinfoFileName("settings.cfg")
    raise
```

Formatting:

- `error_info_name(info)` returns the tag of a value or of a kind.
- `to_string(info)` and `ErrorInfo.name_value_string()` return
  `"[tag] = value\n"`.
- `ErrorInfoContainer` holds the values of one exception. Its
  `diagnostic_information(header)` joins the header and every value's
  line into one report (pass `None` to get the last report built), and
  `clone()` returns an independent copy.

`ErrinfoFileName` (tag `errinfo_file_name_`) is provided ready-made.

## Opening files (`errinfo.fileio`)

`file_open(name, mode)` opens a file with the built-in `open`. If it
cannot, it raises `FileOpenError` carrying `ErrinfoFileName` (the name),
`ErrinfoApiFunction` (`"fopen"`) and `ErrinfoErrno` (the error number;
`errno.EINVAL` for an invalid mode). The original error is chained as the
cause.

```python
from errinfo.fileio import ErrinfoErrno, FileOpenError, file_open
from errinfo.info import get_error_info

try:
    file_open("missing.txt", "r")
except FileOpenError as e:
    print(get_error_info(e, ErrinfoErrno))
```

## Carrying exceptions between threads (`errinfo.exception_ptr`)

```python
from errinfo.exception_ptr import copy_exception, rethrow_exception

ptr = copy_exception(MyError() << Answer(42))
# ... pass ptr to another thread ...
rethrow_exception(ptr)  # raises a copy of MyError carrying Answer(42)
```

- `copy_exception(error)` and `make_exception_ptr(error)` return an
  `ExceptionPtr` to an independent copy of the exception, including its
  attached information.
- `current_exception()` does the same for the exception being handled in
  an `except` block, and raises `RuntimeError` outside one. If the
  exception cannot be copied, the pointer holds an `UnknownException`
  that keeps the attached information and records the original type in
  `OriginalExceptionType`; a `MemoryError` while copying gives a plain
  `MemoryError`.
- `ExceptionPtr.rethrow()` and `rethrow_exception(ptr)` raise a fresh copy
  each time. An empty `ExceptionPtr()` is false and raises `ValueError`
  when rethrown. Two pointers are equal when they share the same stored
  exception.

### Diagnostic reports

`diagnostic_information(target, verbose=True)` describes an exception or
the exception held by a pointer:

```
Dynamic exception type: mymodule.MyError
[answer] = 42
```

With `verbose=False` the type line is left out; a `what: ...` line
follows when the exception has a message. An empty pointer gives
`"<empty>"`.

`to_string(ptr)` returns the same report starting on a new line, with
each following line indented by two spaces, so that it nests inside
other reports. `ErrinfoNestedException` attaches one `ExceptionPtr` to
another exception and is shown this way.

## What this package does not do

It is a library only: there is no command-line tool. It does not record
where an exception was raised (file, line or function) on its own; attach
such details yourself with kinds made by `define_error_info`.