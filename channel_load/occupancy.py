import math

import numpy as np


def psr_autocorrelation(psr) -> np.ndarray:
    """
    Autocorrelation of the PSR function normalised by its peak, keeping only
    the non-negative lags. Index k is the correlation at k meters.

    Args:
        psr: PSR sampled every meter on a grid symmetric around 0

    Returns:
        R_PSR for lags 0, 1, ..., len(psr) - 1
    """
    psr = np.asarray(psr, dtype=float)
    r_psr = np.correlate(psr, psr, mode='full')
    r_psr = r_psr[len(psr) - 1:]
    peak = r_psr.max()
    return r_psr / peak if peak > 0 else r_psr


def occupancy_correction(cbr: float, r_psr: np.ndarray, distance_m: float) -> float:
    """
    Compute 1 - CBR·R_PSR(d), the probability that a vehicle at distance d
    is not blocked by the channel occupancy, with d rounded to the meter.
    Lags beyond the autocorrelation table are uncorrelated.

    Args:
        cbr: Channel Busy Ratio
        r_psr: normalised autocorrelation from psr_autocorrelation()
        distance_m: distance between both vehicles in meters

    Returns:
        Occupancy correction in (0, 1]
    """
    # round half away from zero
    lag = int(math.floor(abs(distance_m) + 0.5))
    correlation = r_psr[lag] if lag < len(r_psr) else 0.0
    return 1.0 - cbr * correlation
