"""
Unit tests for the WINNER+ B1 propagation model and the sensing probabilities.
"""

import numpy as np
import pytest

from ieee80211p.channel import (
    breakpoint_distance, free_space_pathloss, get_pathloss,
    packet_sensing_ratio, sensing_error,
)


def test_breakpoint_distance():
    """dBP = 4·1·1·5.89e9/3e8."""
    assert breakpoint_distance() == pytest.approx(78.5333, abs=1e-3)


def test_pathloss_known_values():
    """Free space dominates at 10 m, the second slope at 200 m."""
    pl_10, _ = get_pathloss(10)
    pl_200, _ = get_pathloss(200)
    assert pl_10 == pytest.approx(67.8229, abs=1e-3)
    assert pl_200 == pytest.approx(101.6805, abs=1e-3)


def test_pathloss_never_below_free_space():
    d = np.linspace(0, 2000, 4001)
    pl, _ = get_pathloss(d)
    assert np.all(pl >= free_space_pathloss(d))


def test_pathloss_continuous_at_breakpoint():
    d_bp = breakpoint_distance()
    pl, _ = get_pathloss(np.array([d_bp - 1e-6, d_bp, d_bp + 1e-6]))
    assert np.max(np.abs(np.diff(pl))) < 0.05


def test_pathloss_small_and_negative_distances():
    """Distance 0 is clamped to 3 m and negative distances are folded."""
    assert get_pathloss(0) == get_pathloss(3)
    assert get_pathloss(1.5) == get_pathloss(3)
    assert get_pathloss(-120) == get_pathloss(120)
    pl, _ = get_pathloss(0)
    assert np.isfinite(pl)


def test_pathloss_shapes_and_shadowing():
    pl, std_dev = get_pathloss(np.arange(0, 501, 25))
    assert pl.shape == std_dev.shape == (21,)
    assert np.all(std_dev == 3)
    assert np.all(np.diff(pl) >= 0)

    pl, std_dev = get_pathloss(100.0)
    assert isinstance(pl, float)
    assert std_dev == 3


def test_sensing_probabilities():
    """PSR is 0.5 when the average power equals the threshold; SEN is its complement."""
    assert packet_sensing_ratio(23, 108, 3, -85) == pytest.approx(0.5)
    pl = np.array([60.0, 100.0, 108.0, 120.0])
    psr = packet_sensing_ratio(23, pl, 3, -85)
    sen = sensing_error(23, pl, 3, -85)
    np.testing.assert_allclose(psr + sen, 1.0)
    assert np.all(np.diff(psr) < 0)
