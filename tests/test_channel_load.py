"""
Unit tests for the packet duration, channel utilization, CBR and occupancy helpers.
"""

import numpy as np
import pytest

from channel_load.channel_busy_ratio import channel_busy_ratio
from channel_load.channel_utilization import channel_utilization
from channel_load.occupancy import occupancy_correction, psr_autocorrelation
from channel_load.transmission_time import transmission_time


def test_transmission_time():
    """40 us + (190 + 30)·8 / 6 Mbps."""
    assert transmission_time(190, 6e6) == pytest.approx(333.333e-6, rel=1e-5)
    assert transmission_time(500, 6e6) > transmission_time(190, 6e6)
    assert transmission_time(190, 27e6) < transmission_time(190, 6e6)


def test_channel_utilization():
    ttr = transmission_time(190, 6e6)
    assert channel_utilization(0.06, 10, ttr, np.ones(100)) == pytest.approx(0.06 * 10 * ttr * 100)


def test_cbr_calibration():
    assert channel_busy_ratio(0.0) == pytest.approx(0.003844)
    assert channel_busy_ratio(0.5) == pytest.approx(-0.2481 * 0.25 + 0.913 * 0.5 + 0.003844)


def test_cbr_non_decreasing_and_bounded():
    """Beyond the vertex of the calibration the CBR saturates."""
    cbr = np.array([channel_busy_ratio(u) for u in np.linspace(0, 10, 1001)])
    assert np.all(np.diff(cbr) >= 0)
    assert np.all((cbr >= 0) & (cbr <= 1))
    assert cbr[-1] == pytest.approx(0.003844 + 0.913 ** 2 / (4 * 0.2481))


def test_psr_autocorrelation():
    psr = np.zeros(201)
    psr[50:151] = 1.0
    r_psr = psr_autocorrelation(psr)
    assert len(r_psr) == len(psr)
    assert r_psr[0] == pytest.approx(1.0)
    assert np.all(np.diff(r_psr) <= 0)
    assert r_psr[101] == pytest.approx(0.0)


def test_occupancy_correction():
    r_psr = np.array([1.0, 0.8, 0.5, 0.2])
    assert occupancy_correction(0.5, r_psr, 0) == pytest.approx(0.5)
    assert occupancy_correction(0.5, r_psr, -1.4) == pytest.approx(0.6)
    assert occupancy_correction(0.5, r_psr, 1.5) == pytest.approx(0.75)
    assert occupancy_correction(0.5, r_psr, 100) == 1.0
