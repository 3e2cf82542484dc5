"""Tests for the owned SoftAsciiString buffer."""

from __future__ import annotations

import copy
from pathlib import Path

import pytest

from softascii.domain.char import SoftAsciiChar
from softascii.domain.errors import FromSourceError, StringFromStrError
from softascii.domain.string import SoftAsciiString
from softascii.domain.text import SoftAsciiStr


def sas(text: str) -> SoftAsciiString:
    return SoftAsciiString.from_string(text)


def ch(value: str) -> SoftAsciiChar:
    return SoftAsciiChar.from_checked(value)


def view(text: str) -> SoftAsciiStr:
    return SoftAsciiStr.from_checked(text)


class TestConstruction:
    def test_from_unchecked(self, ascii_text: str, non_ascii_text: str) -> None:
        assert SoftAsciiString.from_unchecked(ascii_text) == ascii_text
        assert SoftAsciiString.from_unchecked(non_ascii_text) == non_ascii_text

    def test_from_unchecked_accepts_soft_values(self) -> None:
        assert SoftAsciiString.from_unchecked(view("ab")) == "ab"
        assert SoftAsciiString.from_unchecked(sas("cd")) == "cd"
        assert SoftAsciiString.from_unchecked(ch("e")) == "e"

    def test_from_unchecked_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            SoftAsciiString.from_unchecked(42)  # type: ignore[arg-type]

    def test_from_string(self, ascii_text: str) -> None:
        assert sas(ascii_text).as_str() == ascii_text

    def test_from_string_rejection_keeps_source(self, non_ascii_text: str) -> None:
        with pytest.raises(FromSourceError) as exc_info:
            SoftAsciiString.from_string(non_ascii_text)
        error = exc_info.value
        assert error.into_source() is non_ascii_text
        assert str(error) == "source is not soft ascii"

    def test_from_string_rejects_unchecked_wrapper(self, non_ascii_text: str) -> None:
        source = SoftAsciiStr.from_unchecked(non_ascii_text)
        with pytest.raises(FromSourceError) as exc_info:
            SoftAsciiString.from_string(source)
        assert exc_info.value.source is source
        assert exc_info.value.first_non_ascii == 9

    def test_new_and_with_capacity(self) -> None:
        empty = SoftAsciiString.new()
        assert empty.is_empty()
        assert empty == ""
        reserved = SoftAsciiString.with_capacity(16)
        assert reserved.is_empty()
        assert reserved.capacity() >= 16

    def test_with_negative_capacity(self) -> None:
        with pytest.raises(ValueError):
            SoftAsciiString.with_capacity(-1)

    def test_parse(self) -> None:
        assert SoftAsciiString.parse("hy ho") == "hy ho"
        with pytest.raises(StringFromStrError) as exc_info:
            SoftAsciiString.parse("↓")
        assert str(exc_info.value) == "could not convert str to SoftAsciiString"

    def test_parse_rejects_non_str(self) -> None:
        with pytest.raises(TypeError):
            SoftAsciiString.parse(5)  # type: ignore[arg-type]

    def test_from_iterable(self) -> None:
        result = SoftAsciiString.from_iterable([ch("a"), view("bc"), sas("de")])
        assert result == "abcde"


class TestRevalidation:
    def test_ascii_succeeds(self, ascii_text: str) -> None:
        owned = SoftAsciiString.from_unchecked(ascii_text)
        assert owned.revalidate_soft_constraint() is owned

    def test_non_ascii_returns_raw_buffer(self, non_ascii_text: str) -> None:
        result = SoftAsciiString.from_unchecked(non_ascii_text).revalidate_soft_constraint()
        assert type(result) is str
        assert result == non_ascii_text

    def test_escape_hatch_then_revalidate(self, ascii_text: str) -> None:
        owned = sas(ascii_text)
        owned.inner_string = owned.inner_string + "←"
        assert not owned.is_ascii()
        assert owned.revalidate_soft_constraint() == ascii_text + "←"

        owned.inner_string = owned.inner_string[:-1]
        assert owned.revalidate_soft_constraint() is owned

    def test_escape_hatch_requires_str(self) -> None:
        owned = sas("ab")
        with pytest.raises(TypeError):
            owned.inner_string = b"cd"  # type: ignore[assignment]


class TestMutation:
    def test_push_and_push_str(self) -> None:
        owned = sas("ab")
        owned.push(ch("c"))
        owned.push_str(view("de"))
        owned.push_str(sas("fg"))
        assert owned == "abcdefg"

    def test_plain_input_is_refused(self) -> None:
        owned = sas("ab")
        with pytest.raises(TypeError):
            owned.push("c")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            owned.push_str("cd")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            owned += "cd"  # type: ignore[operator]
        assert owned == "ab"

    def test_insert(self) -> None:
        owned = sas("ac")
        owned.insert(1, ch("b"))
        owned.insert(3, ch("d"))
        owned.insert_str(0, view(">>"))
        assert owned == ">>abcd"

    def test_insert_out_of_range(self) -> None:
        owned = sas("ab")
        with pytest.raises(IndexError):
            owned.insert(3, ch("c"))
        with pytest.raises(IndexError):
            owned.insert_str(-1, view("c"))

    def test_pop(self) -> None:
        owned = sas("ab")
        assert owned.pop() == ch("b")
        assert owned.pop() == ch("a")
        assert owned.pop() is None
        assert owned.is_empty()

    def test_pop_rewraps_without_revalidation(self) -> None:
        owned = SoftAsciiString.from_unchecked("a←")
        popped = owned.pop()
        assert isinstance(popped, SoftAsciiChar)
        assert popped == "←"

    def test_remove(self) -> None:
        owned = sas("abc")
        assert owned.remove(1) == "b"
        assert owned == "ac"
        with pytest.raises(IndexError):
            owned.remove(2)

    def test_extend(self) -> None:
        owned = sas("x")
        owned.extend([ch("y"), view("z1"), sas("23")])
        assert owned == "xyz123"

    def test_extend_rejects_plain_text(self) -> None:
        owned = sas("x")
        with pytest.raises(TypeError):
            owned.extend(["y"])  # type: ignore[list-item]
        assert owned == "x"

    def test_iadd_and_add(self) -> None:
        owned = sas("a")
        same = owned
        owned += view("b")
        owned += ch("c")
        assert owned is same
        assert owned == "abc"

        combined = owned + sas("d")
        assert combined == "abcd"
        assert owned == "abc"

    def test_truncate(self) -> None:
        owned = sas("hello")
        owned.truncate(10)
        assert owned == "hello"
        owned.truncate(2)
        assert owned == "he"
        with pytest.raises(ValueError):
            owned.truncate(-1)

    def test_clear_keeps_capacity(self) -> None:
        owned = sas("hello")
        owned.clear()
        assert owned.is_empty()
        assert owned.capacity() >= 5

    def test_capacity_hints(self) -> None:
        owned = sas("abc")
        assert owned.capacity() == 3
        owned.reserve(10)
        assert owned.capacity() == 13
        owned.reserve_exact(2)
        assert owned.capacity() == 13
        owned.shrink_to_fit()
        assert owned.capacity() == 3

    def test_split_off(self) -> None:
        owned = sas("header: value")
        tail = owned.split_off(7)
        assert owned == "header:"
        assert tail == " value"
        assert isinstance(tail, SoftAsciiString)

    @pytest.mark.parametrize("at", [0, 3])
    def test_split_off_edges(self, at: int) -> None:
        owned = sas("abc")
        tail = owned.split_off(at)
        assert owned.as_str() + tail.as_str() == "abc"

    def test_split_off_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            sas("abc").split_off(4)

    def test_slice_assignment(self) -> None:
        owned = sas("hello world")
        owned[0:5] = view("howdy")
        assert owned == "howdy world"
        owned[5:] = sas("!")
        assert owned == "howdy!"
        owned[0] = ch("H")
        assert owned == "Howdy!"

    def test_slice_assignment_refuses_plain_text(self) -> None:
        owned = sas("abc")
        with pytest.raises(TypeError):
            owned[0:1] = "z"  # type: ignore[assignment]


class TestViews:
    def test_indexing_returns_view_without_revalidation(self) -> None:
        owned = SoftAsciiString.from_unchecked("ab←cd")
        part = owned[1:4]
        assert isinstance(part, SoftAsciiStr)
        assert part == "b←c"
        assert owned[:2] == "ab"
        assert owned[3:] == "cd"
        assert owned[:] == "ab←cd"

    def test_integer_index(self) -> None:
        assert sas("abc")[1] == ch("b")

    def test_as_soft_ascii_str_shares_buffer(self, ascii_text: str) -> None:
        owned = sas(ascii_text)
        assert owned.as_soft_ascii_str().as_str() is owned.as_str()
        assert owned.as_soft_ascii_str_mut() == ascii_text

    def test_forwarded_view_methods(self) -> None:
        owned = sas("  a b \n c ")
        assert owned.trim() == "a b \n c"
        assert list(owned.split_whitespace()) == ["a", "b", "c"]
        assert owned.find("b") == 4
        assert owned.startswith("  a")

    def test_iteration_and_contains(self) -> None:
        owned = sas("abc")
        assert list(owned) == ["a", "b", "c"]
        assert "bc" in owned
        assert ch("a") in owned


class TestConversions:
    def test_into_plain_types(self) -> None:
        owned = SoftAsciiString.from_unchecked("test")
        assert owned.into_string() == "test"
        assert str(owned) == "test"
        assert owned.into_bytes() == b"test"
        assert bytes(owned) == b"test"
        assert owned.into_boxed_str() == "test"
        boxed = owned.into_boxed_soft_ascii_str()
        assert isinstance(boxed, SoftAsciiStr)
        assert boxed == "test"

    def test_round_trip_through_plain_str(self, ascii_text: str) -> None:
        plain = str(sas(ascii_text))
        assert SoftAsciiString.from_unchecked(plain).as_bytes() == ascii_text.encode()

    def test_fspath(self, tmp_path: Path) -> None:
        target = tmp_path / "file.txt"
        target.write_text("x", encoding="ascii")
        owned = sas(str(target))
        assert Path(owned).read_text(encoding="ascii") == "x"

    def test_to_socket_addrs(self) -> None:
        assert sas("127.0.0.1:25").to_socket_addrs() == [("127.0.0.1", 25)]

    def test_copy_is_independent(self) -> None:
        owned = sas("abc")
        duplicate = copy.copy(owned)
        duplicate.push(ch("d"))
        assert owned == "abc"
        assert duplicate == "abcd"

    def test_copy_and_split_off_keep_subclass(self) -> None:
        class HeaderValue(SoftAsciiString):
            pass

        owned = HeaderValue.from_unchecked("key: value")
        assert type(owned.copy()) is HeaderValue
        assert type(owned.split_off(4)) is HeaderValue

    def test_repr_and_format(self) -> None:
        owned = sas("ab")
        assert repr(owned) == "SoftAsciiString('ab')"
        assert f"{owned:-<4}" == "ab--"


class TestEquality:
    def test_cross_type_equality(self) -> None:
        owned = sas("abc")
        assert owned == "abc"
        assert "abc" == owned
        assert owned == view("abc")
        assert view("abc") == owned
        assert owned == sas("abc")
        assert owned != "abd"

    def test_ordering(self) -> None:
        assert sas("a") < sas("b")
        assert sas("b") >= "a"
        assert sorted([sas("b"), sas("a")]) == ["a", "b"]

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(sas("abc"))

    def test_view_is_hashable_key(self) -> None:
        owned = sas("abc")
        assert {owned.as_soft_ascii_str(): 1}["abc"] == 1
