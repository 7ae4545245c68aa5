# ieee80211p/frame_error.py

import numpy as np

from ieee80211p.config import FER_LUT_EB_NO_DB, FER_LUT_FER


def fer_curve(eb_no_db):
    """
    FER vs Eb/No curve of the 802.11p receiver, linearly interpolated.
    The extreme anchors are stretched to the evaluated range so values
    outside the tabulated curve take the value of the nearest end point.
    """
    eb_no_db = np.asarray(eb_no_db, dtype=float)
    anchors = list(FER_LUT_EB_NO_DB)
    anchors[0] = min(-1, eb_no_db[0])
    anchors[-1] = max(36, eb_no_db[-1])
    return np.interp(eb_no_db, anchors, FER_LUT_FER)


def average_fer(eb_no_db, pdf_eb_no, step_db):
    """
    Average Frame Error Rate given the distribution of the Eb/No at the receiver.

    Args:
        eb_no_db: ascending Eb/No grid (dB)
        pdf_eb_no: probability density of the Eb/No over that grid
        step_db: grid resolution (dB)

    Returns:
        Average FER in [0, 1]
    """
    if step_db <= 0:
        raise ValueError(f"step_db must be positive, got {step_db}")
    fer = fer_curve(eb_no_db)
    fer_avg = float(np.dot(np.asarray(pdf_eb_no, dtype=float), fer) * step_db)
    # Clamp rounding noise of the Riemann sum
    return min(max(fer_avg, 0.0), 1.0)
