"""Tests for error accumulation."""

import logging

import pytest

from netlayout.errors import ErrorAccumulator, LayoutError, LayoutInvariantError


class TestLayoutError:
    """Tests for LayoutError."""

    def test_string_has_one_line_per_message(self) -> None:
        """Test each message is rendered on its own prefixed line."""
        error = LayoutError("layout", ["first problem", "second problem"])
        assert str(error) == "layout: first problem\nlayout: second problem"

    def test_is_an_exception(self) -> None:
        """Test LayoutError can be raised and caught."""
        with pytest.raises(LayoutError, match="layout: broken"):
            raise LayoutError("layout", ["broken"])

    def test_messages_are_copied(self) -> None:
        """Test later changes to the source list do not leak in."""
        messages = ["one"]
        error = LayoutError("layout", messages)
        messages.append("two")
        assert error.messages == ["one"]


class TestErrorAccumulator:
    """Tests for ErrorAccumulator."""

    def test_empty_accumulator(self) -> None:
        """Test an empty accumulator materializes to None."""
        e = ErrorAccumulator("network")
        assert e.empty()
        assert len(e) == 0
        assert e.or_none() is None

    def test_errorf_formats_arguments(self) -> None:
        """Test messages are %-formatted."""
        e = ErrorAccumulator("network")
        e.errorf("gateway4 %s is not a single IPv4 address", "fe80::1")
        assert not e.empty()
        assert e.messages == ["gateway4 fe80::1 is not a single IPv4 address"]

    def test_errorf_without_arguments_keeps_percent(self) -> None:
        """Test a message without arguments is taken literally."""
        e = ErrorAccumulator("network")
        e.errorf("100% broken")
        assert e.messages == ["100% broken"]

    def test_keeps_every_error(self) -> None:
        """Test recording does not stop at the first error."""
        e = ErrorAccumulator("layout")
        e.errorf("one")
        e.errorf("two")
        e.errorf("three")
        error = e.or_none()
        assert error is not None
        assert error.prefix == "layout"
        assert error.messages == ["one", "two", "three"]

    def test_merge_keeps_child_prefix(self) -> None:
        """Test merged messages carry the prefix of the scope they came from."""
        child = ErrorAccumulator("route")
        child.errorf("unicast routes require 'to' and 'via'")
        parent = ErrorAccumulator("network")
        parent.merge(child.or_none())
        top = ErrorAccumulator("layout")
        top.merge(parent.or_none())
        assert str(top.or_none()) == (
            "layout: network: route: unicast routes require 'to' and 'via'"
        )

    def test_merge_none_is_noop(self) -> None:
        """Test merging a clean result adds nothing."""
        e = ErrorAccumulator("layout")
        e.merge(None)
        assert e.empty()
        assert e.or_none() is None

    def test_errors_are_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test each recorded error is logged with its prefix."""
        e = ErrorAccumulator("bond:bond0")
        with caplog.at_level(logging.DEBUG, logger="netlayout.errors"):
            e.errorf("something is wrong")
        assert "bond:bond0: something is wrong" in caplog.text


class TestLayoutInvariantError:
    """Tests for LayoutInvariantError."""

    def test_is_an_assertion(self) -> None:
        """Test internal invariant failures are assertions, not LayoutErrors."""
        assert issubclass(LayoutInvariantError, AssertionError)
        assert not issubclass(LayoutInvariantError, LayoutError)
