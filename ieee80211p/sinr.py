# ieee80211p/sinr.py
"""
Distribution of the SINR (or SNR) experienced by a packet that has been
sensed by the receiver.

The received power of the desired packet is Gaussian in dB (log-normal
shadowing) and truncated at the sensing threshold, since packets below it
are already accounted as sensing errors. The interference-plus-noise power

    D = 10·log10(10^(I/10) + 10^(N/10))

has a Gaussian interference power I in dB, or collapses to the noise floor N
when there is no interferer. Both powers are independent, so the SINR = S - D
distribution is the correlation of both discretised distributions.
"""

from dataclasses import dataclass
import math

import numpy as np
from scipy.stats import norm, truncnorm

from ieee80211p.config import STEP_DB

# Width of the discretised distributions, in standard deviations
SPAN_STD = 6.0


@dataclass
class SinrDistribution:
    grid_db: np.ndarray   # SINR values (dB), ascending, spaced step_db
    pdf:     np.ndarray   # probability density over grid_db
    step_db: float

    def __iter__(self):
        return iter((self.grid_db, self.pdf))

    def mean(self) -> float:
        return float(np.dot(self.grid_db, self.pdf) * self.step_db)

    def total_probability(self) -> float:
        return float(np.sum(self.pdf) * self.step_db)


def _cell_edges(lower, n_points, step_db):
    # The first cell starts at `lower`, the rest are centred on the grid points
    edges = lower + (np.arange(n_points + 1) - 0.5) * step_db
    edges[0] = lower
    return edges


def _signal_masses(signal_dbm, std_db, sensitivity_dbm, step_db):
    upper = max(signal_dbm, sensitivity_dbm) + SPAN_STD * std_db
    n_points = int(math.ceil((upper - sensitivity_dbm) / step_db)) + 1
    edges = _cell_edges(sensitivity_dbm, n_points, step_db)
    a = (sensitivity_dbm - signal_dbm) / std_db
    masses = np.clip(np.diff(truncnorm.cdf(edges, a, np.inf, loc=signal_dbm, scale=std_db)), 0.0, None)
    if masses.sum() <= 0:
        # Signal far below the threshold: all the sensed packets sit at Psen
        masses[0] = 1.0
    return masses


def _interference_masses(interference_dbm, std_db, noise_dbm, step_db):
    if interference_dbm == -math.inf:
        return np.ones(1)

    upper = max(noise_dbm, interference_dbm) + SPAN_STD * std_db
    n_points = int(math.ceil((upper - noise_dbm) / step_db)) + 1
    edges = _cell_edges(noise_dbm, n_points, step_db)

    # P(D <= x) = P(I <= 10·log10(10^(x/10) - 10^(N/10))), zero at x = N
    with np.errstate(divide='ignore'):
        i_dbm = 10 * np.log10(np.maximum(10 ** (edges / 10) - 10 ** (noise_dbm / 10), 0.0))
    cdf = norm.cdf(i_dbm, loc=interference_dbm, scale=std_db)
    cdf[0] = 0.0
    masses = np.clip(np.diff(cdf), 0.0, None)
    # Tail beyond the last edge goes to the last cell
    masses[-1] += 1.0 - cdf[-1]
    return masses


def sinr_distribution(signal_dbm, interference_dbm, signal_std_db, interference_std_db,
                      noise_dbm, sensitivity_dbm, step_db=STEP_DB) -> SinrDistribution:
    """
    Discretised SINR distribution of a sensed packet.

    Args:
        signal_dbm: average received power of the desired packet (dBm)
        interference_dbm: average received power of the interferer (dBm),
            -inf when there is no interference (SNR)
        signal_std_db: shadowing standard deviation of the desired link (dB)
        interference_std_db: shadowing standard deviation of the interfering link (dB)
        noise_dbm: background noise (dBm)
        sensitivity_dbm: sensing threshold (dBm)
        step_db: grid resolution (dB)

    Returns:
        SinrDistribution with sum(pdf) * step_db == 1
    """
    if step_db <= 0:
        raise ValueError(f"step_db must be positive, got {step_db}")
    if signal_std_db <= 0 or (interference_dbm != -math.inf and interference_std_db <= 0):
        raise ValueError("Shadowing standard deviations must be positive")

    s_masses = _signal_masses(signal_dbm, signal_std_db, sensitivity_dbm, step_db)
    d_masses = _interference_masses(interference_dbm, interference_std_db, noise_dbm, step_db)

    # S grid: Psen + i·step, D grid: N + k·step -> S - D on (Psen - N) + m·step
    pmf = np.convolve(s_masses, d_masses[::-1])
    pmf = pmf / pmf.sum()
    offset = (sensitivity_dbm - noise_dbm) - (len(d_masses) - 1) * step_db
    grid = offset + np.arange(len(pmf)) * step_db

    return SinrDistribution(grid_db=grid, pdf=pmf / step_db, step_db=step_db)
