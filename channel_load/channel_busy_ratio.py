from ieee80211p.config import CBR_COEFFICIENTS


def channel_busy_ratio(utilization: float, coefficients=CBR_COEFFICIENTS) -> float:
    """
    Map the channel utilization to the Channel Busy Ratio with the empirical
    quadratic calibration CBR = a·u^2 + b·u + c.

    Past the vertex of the parabola the CBR is held at its maximum, so a
    heavier load never yields a lower CBR.

    Args:
        utilization: channel utilization u (>= 0)
        coefficients: (a, b, c) of the calibration

    Returns:
        CBR between 0 and 1
    """
    a, b, c = coefficients
    u = utilization
    if a < 0:
        u = min(u, -b / (2 * a))
    cbr = a * u ** 2 + b * u + c
    return min(max(cbr, 0.0), 1.0)
