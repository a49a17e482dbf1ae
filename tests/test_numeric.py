"""Tests for clamping and value snapping."""

import pytest

from circular_slider.utils import clamp, coerce_value, round_half_up


def test_clamp() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


@pytest.mark.parametrize(
    ("value", "expected"), [(2.5, 3.0), (-2.5, -2.0), (2.49, 2.0), (-0.5, 0.0)]
)
def test_round_half_up(value: float, expected: float) -> None:
    assert round_half_up(value) == expected


def test_coerce_without_flags_is_identity() -> None:
    assert coerce_value(12.345) == 12.345


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ((True, False, False), 83.0),
        ((False, True, False), 83.5),
        ((False, False, True), 83.25),
        ((True, True, True), 83.0),
    ],
)
def test_coerce_steps(flags: tuple, expected: float) -> None:
    assert coerce_value(83.3333, *flags) == expected


def test_coerce_half_rounds_ties_up() -> None:
    assert coerce_value(1.25, to_half=True) == 1.5
    assert coerce_value(1.125, to_quarter=True) == 1.25
