"""
Unit tests for the average Frame Error Rate.
"""

import numpy as np
import pytest

from ieee80211p.frame_error import average_fer, fer_curve


def test_fer_curve_anchors():
    eb_no = np.array([-5.0, 0.0, 5.0, 10.0, 12.5, 15.0, 35.0, 50.0])
    fer = fer_curve(eb_no)
    np.testing.assert_allclose(fer, [1, 1, 1, 0.4, 0.2075, 1.5e-2, 1e-3, 1e-3])


def test_average_fer_point_mass():
    """A distribution concentrated at 10 dB returns the FER at 10 dB."""
    step = 0.1
    eb_no = np.array([9.9, 10.0, 10.1])
    pdf = np.array([0.0, 1 / step, 0.0])
    assert average_fer(eb_no, pdf, step) == pytest.approx(0.4)


def test_average_fer_out_of_table_ranges():
    """Values outside the curve take the value of the nearest end point."""
    step = 0.1
    low = np.arange(-50, -40, step)
    high = np.arange(100, 110, step)
    uniform = np.full(len(low), 1 / (len(low) * step))
    assert average_fer(low, uniform, step) == pytest.approx(1.0)
    assert average_fer(high, np.full(len(high), 1 / (len(high) * step)), step) == pytest.approx(1e-3)


def test_average_fer_is_bounded():
    step = 0.1
    eb_no = np.arange(-10, 40, step)
    pdf = np.full(len(eb_no), 1 / (len(eb_no) * step))
    fer = average_fer(eb_no, pdf, step)
    assert 0.0 <= fer <= 1.0


def test_average_fer_rejects_bad_step():
    with pytest.raises(ValueError):
        average_fer([0.0, 1.0], [1.0, 0.0], 0)
