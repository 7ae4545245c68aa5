# ieee80211p/channel.py

import numpy as np
from scipy.special import erf

from ieee80211p.config import (
    CARRIER_FREQUENCY_HZ, TX_ANTENNA_HEIGHT_M, RX_ANTENNA_HEIGHT_M,
    ENVIRONMENT_HEIGHT_M, SPEED_OF_LIGHT, MIN_DISTANCE_M, SHADOWING_STD_DB,
)


def breakpoint_distance(fc_hz=CARRIER_FREQUENCY_HZ):
    """
    Breakpoint distance (m) of the dual-slope model:
      dBP = 4·(hBS - h)·(hMS - h)·fc / c
    """
    return (4 * (TX_ANTENNA_HEIGHT_M - ENVIRONMENT_HEIGHT_M)
            * (RX_ANTENNA_HEIGHT_M - ENVIRONMENT_HEIGHT_M) * fc_hz / SPEED_OF_LIGHT)


def _clamp_distance(distance):
    d = np.abs(np.asarray(distance, dtype=float))
    return np.maximum(d, MIN_DISTANCE_M)


def free_space_pathloss(distance, fc_hz=CARRIER_FREQUENCY_HZ):
    """
    Free-space pathloss (dB): 20·log10(d) + 46.4 + 20·log10(fc[GHz] / 5).
    Distances are folded and clamped like in get_pathloss().
    """
    d = _clamp_distance(distance)
    pl = 20 * np.log10(d) + 46.4 + 20 * np.log10(fc_hz * 1e-9 / 5)
    return pl if pl.ndim else float(pl)


def get_pathloss(distance, fc_hz=CARRIER_FREQUENCY_HZ):
    """
    Pathloss and shadowing standard deviation for a set of Tx-Rx distances
    following the WINNER+ B1 propagation model.

    Args:
        distance: distance(s) in meters, scalar or array. Negative values are
            folded and values below 3 m are clamped to 3 m.
        fc_hz: carrier frequency in Hz

    Returns:
        (pl_db, std_dev_db) with the same shape as `distance`
    """
    d = _clamp_distance(distance)
    h_bs = TX_ANTENNA_HEIGHT_M - ENVIRONMENT_HEIGHT_M
    h_ms = RX_ANTENNA_HEIGHT_M - ENVIRONMENT_HEIGHT_M
    d_bp = breakpoint_distance(fc_hz)

    # Below and above the breakpoint distance
    pl_near = 22.7 * np.log10(d) + 27 + 20 * np.log10(fc_hz / 1e9)
    pl_far = (40 * np.log10(d) + 7.56 - 17.3 * np.log10(h_bs)
              - 17.3 * np.log10(h_ms) + 2.7 * np.log10(fc_hz / 1e9))
    pl = np.where(d < d_bp, pl_near, pl_far)

    # Never below the free-space pathloss
    pl = np.maximum(pl, free_space_pathloss(d, fc_hz))
    std_dev = np.full_like(pl, SHADOWING_STD_DB)

    if pl.ndim == 0:
        return float(pl), float(std_dev)
    return pl, std_dev


def packet_sensing_ratio(pt_dbm, pl_db, std_dev_db, psen_dbm):
    """
    Probability that the received power Pt - PL, with log-normal shadowing
    of standard deviation std_dev_db, is above the sensing threshold psen_dbm.
    Also used as the detection probability between two vehicles.
    """
    psr = 0.5 * (1 + erf((pt_dbm - np.asarray(pl_db) - psen_dbm) / (np.asarray(std_dev_db) * np.sqrt(2))))
    return psr if np.ndim(psr) else float(psr)


def sensing_error(pt_dbm, pl_db, std_dev_db, psen_dbm):
    """Probability that the received power falls below the sensing threshold."""
    err = 0.5 * (1 - erf((pt_dbm - np.asarray(pl_db) - psen_dbm) / (np.asarray(std_dev_db) * np.sqrt(2))))
    return err if np.ndim(err) else float(err)
