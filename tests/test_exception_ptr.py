import threading

import pytest

from errinfo.exception_ptr import (
    ErrinfoNestedException,
    ExceptionPtr,
    OriginalExceptionType,
    UnknownException,
    copy_exception,
    current_exception,
    diagnostic_information,
    make_exception_ptr,
    rethrow_exception,
    to_string,
)
from errinfo.info import Error, define_error_info, error_info_name, get_error_info

Answer = define_error_info("tag_answer")
TaggedInt1 = define_error_info("test_tag1")


class TaggedInt2(define_error_info("test_tag2")):
    __slots__ = ()

    def name_value_string(self):
        text = "fourty-two" if self.value == 42 else "bad value"
        return f"[{error_info_name(self)}] = {text}"


class Err(Error):
    pass


class Error1(Error):
    def __str__(self):
        return "error1"


class Error2(Error):
    pass


class Error3(Exception):
    def __str__(self):
        return "error3"


class Uncopyable(Error):
    def __init__(self, first, second):
        super().__init__(first + second)


def test_simple_rethrow():
    ptr = copy_exception(Err() << Answer(42))
    with pytest.raises(Err) as info:
        rethrow_exception(ptr)
    assert get_error_info(info.value, Answer) == 42


def test_rethrow_via_method():
    ptr = make_exception_ptr(Err() << Answer(42))
    with pytest.raises(Err) as info:
        ptr.rethrow()
    assert get_error_info(info.value, Answer) == 42


def test_copy_is_independent_of_original():
    original = Err() << Answer(42)
    ptr = copy_exception(original)
    original << Answer(7)
    with pytest.raises(Err) as info:
        rethrow_exception(ptr)
    assert get_error_info(info.value, Answer) == 42
    assert info.value is not original


def test_each_rethrow_is_a_fresh_copy():
    ptr = copy_exception(Err() << Answer(1))
    caught = []
    for _ in range(2):
        try:
            rethrow_exception(ptr)
        except Err as exc:
            caught.append(exc)
    caught[0] << Answer(99)
    assert caught[0] is not caught[1]
    assert get_error_info(caught[1], Answer) == 1


class _Future:
    def __init__(self):
        self._ready = threading.Event()
        self._exc = ExceptionPtr()

    def set_exception(self, ptr):
        self._exc = ptr
        self._ready.set()

    def get_exception(self):
        self._ready.wait()
        rethrow_exception(self._exc)


def test_thread_handoff():
    caught = []
    lock = threading.Lock()

    def producer(fut):
        fut.set_exception(copy_exception(Err() << Answer(42)))

    def consume():
        for _ in range(10):
            fut = _Future()
            thread = threading.Thread(target=producer, args=(fut,))
            thread.start()
            try:
                fut.get_exception()
            except BaseException as exc:
                outcome = exc
            else:
                outcome = None
            thread.join()
            with lock:
                caught.append(outcome)

    threads = [threading.Thread(target=consume) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(caught) == 100
    assert all(isinstance(exc, Err) for exc in caught)
    assert [get_error_info(exc, Answer) for exc in caught] == [42] * 100
    assert len({id(exc) for exc in caught}) == 100


def test_empty_pointer():
    ptr = ExceptionPtr()
    assert not ptr
    assert ptr == ExceptionPtr()
    with pytest.raises(ValueError):
        rethrow_exception(ptr)


def test_equality_follows_shared_exception():
    ptr = copy_exception(Err())
    other = copy_exception(Err())
    assert ptr == ExceptionPtr(ptr._exc)
    assert not (ptr == other)


def test_current_exception_copies_active():
    try:
        raise Err() << Answer(5)
    except Err:
        ptr = current_exception()
    assert bool(ptr)
    with pytest.raises(Err) as info:
        rethrow_exception(ptr)
    assert get_error_info(info.value, Answer) == 5


def test_current_exception_without_active_exception():
    with pytest.raises(RuntimeError):
        current_exception()


def test_current_exception_falls_back_to_unknown():
    try:
        raise Uncopyable("a", "b") << Answer(3)
    except Uncopyable:
        ptr = current_exception()
    with pytest.raises(UnknownException) as info:
        rethrow_exception(ptr)
    assert get_error_info(info.value, OriginalExceptionType) is Uncopyable
    assert get_error_info(info.value, Answer) == 3


def test_unknown_exception_describes_original_type():
    text = diagnostic_information(UnknownException(ValueError("x")))
    assert "[tag_original_exception_type] = ValueError\n" in text


def test_diagnostic_information_error1():
    x = Error1() << TaggedInt1(42) << TaggedInt2(42)
    assert str(x) == "error1"
    di1 = diagnostic_information(x)
    x << TaggedInt1(2) << TaggedInt2(2)
    di2 = diagnostic_information(x)
    assert di1 != di2
    for di in (di1, di2):
        assert "type:" in di
        assert "Error1" in di
        assert "error1" in di
        assert "test_tag1" in di
        assert "test_tag2" in di
    assert "fourty-two" in di1
    assert "bad value" in di2


def test_diagnostic_information_of_current_exception():
    try:
        raise Error1() << TaggedInt1(42) << TaggedInt2(42)
    except Error1 as x:
        di1 = diagnostic_information(current_exception())
        x << TaggedInt1(2) << TaggedInt2(2)
        di2 = diagnostic_information(current_exception())
    assert di1 != di2
    assert "type:" in di1 and "type:" in di2
    assert "fourty-two" in di1
    assert "bad value" in di2


def test_diagnostic_information_error2():
    x = Error2() << TaggedInt1(42) << TaggedInt2(42)
    di1 = diagnostic_information(x)
    x << TaggedInt1(2) << TaggedInt2(2)
    di2 = diagnostic_information(x)
    assert di1 != di2
    assert "test_tag1" in di1 and "test_tag2" in di1
    assert "fourty-two" in di1
    assert "bad value" in di2


def test_diagnostic_information_plain_exception():
    di = diagnostic_information(Error3())
    assert "type:" in di
    assert "error3" in di
    try:
        raise Error3()
    except Error3:
        di = diagnostic_information(current_exception())
    assert "error3" in di


def test_diagnostic_information_not_verbose():
    x = Error1() << TaggedInt1(42)
    di = diagnostic_information(x, False)
    assert "Dynamic exception type" not in di
    assert di == "what: error1\n[test_tag1] = 42\n"


def test_diagnostic_information_empty_pointer():
    assert diagnostic_information(ExceptionPtr()) == "<empty>"


def test_diagnostic_information_rejects_other_values():
    with pytest.raises(TypeError):
        diagnostic_information(42)


def test_to_string_empty():
    assert to_string(ExceptionPtr()) == "\n  <empty>"


def test_to_string_indents_every_line():
    ptr = copy_exception(Error1() << TaggedInt1(42))
    text = to_string(ptr)
    assert text.startswith("\n  Dynamic exception type: ")
    assert "\n  what: error1\n" in text
    assert text.endswith("\n  [test_tag1] = 42\n")


def test_nested_exception_info():
    inner = copy_exception(Error1() << TaggedInt1(42))
    outer = Err() << ErrinfoNestedException(inner)
    assert get_error_info(outer, ErrinfoNestedException) == inner
    text = diagnostic_information(outer)
    assert "[errinfo_nested_exception_] = \n  Dynamic exception type: " in text
    assert "\n  [test_tag1] = 42\n" in text


def test_copy_exception_requires_exception():
    with pytest.raises(TypeError):
        copy_exception("not an exception")