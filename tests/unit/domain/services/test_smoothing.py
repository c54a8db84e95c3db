from __future__ import annotations

import pytest

from inventory_forecast.domain.services import exponential_smoothing


def test_recurrence():
    assert exponential_smoothing([10, 20, 30], alpha=0.5) == pytest.approx(
        [10.0, 15.0, 22.5]
    )


def test_default_alpha():
    smoothed = exponential_smoothing([10, 20])
    assert smoothed == pytest.approx([10.0, 13.0])


def test_alpha_one_returns_input():
    assert exponential_smoothing([4, 8, 1], alpha=1.0) == pytest.approx([4, 8, 1])


def test_empty_input():
    assert exponential_smoothing([]) == []


@pytest.mark.parametrize("alpha", [0.0, -0.2, 1.5])
def test_alpha_out_of_range(alpha):
    with pytest.raises(ValueError):
        exponential_smoothing([1, 2, 3], alpha=alpha)


@pytest.mark.parametrize("alpha", [0.1, 0.3, 1.0])
def test_constant_series_is_unchanged(alpha):
    assert exponential_smoothing([7.5] * 12, alpha=alpha) == pytest.approx([7.5] * 12)
