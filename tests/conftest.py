"""Shared fixtures for pushstream tests."""

from __future__ import annotations

import typing

import pytest
from kungfu import Error, Ok, Result

from pushstream import PassthroughSubject


def ok_value[T](result: Result[T, typing.Any]) -> T:
    match result:
        case Ok(value):
            return value
        case Error(reason):
            pytest.fail(f"expected Ok, got Error({reason!r})")
    raise AssertionError("unreachable")


def error_reason[E](result: Result[typing.Any, E]) -> E:
    match result:
        case Error(reason):
            return reason
        case Ok(value):
            pytest.fail(f"expected Error, got Ok({value!r})")
    raise AssertionError("unreachable")


@pytest.fixture
def subject() -> PassthroughSubject[typing.Any, typing.Any]:
    """Fresh push-driven source."""
    return PassthroughSubject()


@pytest.fixture
def unwrap_ok():
    return ok_value


@pytest.fixture
def unwrap_error():
    return error_reason
