# ieee80211p/model.py
"""
Analytical model of the performance of IEEE 802.11p V2V broadcast
communications: PDR as a function of the Tx-Rx distance, the probability of
the four types of packet errors and the Channel Busy Ratio.

Reference: M. Sepulcre, M. Gonzalez-Martín, J. Gozalvez, R. Molina-Masegosa,
B. Coll-Perales, "Analytical Models of the Performance of IEEE 802.11p
Vehicle to Vehicle Communications", IEEE Transactions on Vehicular
Technology, 2021. DOI: 10.1109/TVT.2021.3124708
"""

from dataclasses import dataclass
import logging

import numpy as np

from ieee80211p.config import default_params, DISTANCE_TX_TO_RX
from ieee80211p.context import LinkParameters, RunContext, build_run_context
from ieee80211p.errors import ModelConsistencyError, check_probability
from ieee80211p.interference import interference_errors
from ieee80211p.link_budget import link_budget

logger = logging.getLogger(__name__)


@dataclass
class DistanceErrors:
    distance_m: float
    delta_sen:  float
    delta_rxb:  float
    delta_pro:  float
    delta_col:  float

    @property
    def pdr(self) -> float:
        return 1 - self.delta_sen - self.delta_rxb - self.delta_pro - self.delta_col


@dataclass
class ModelResult:
    link:      LinkParameters
    distances: np.ndarray   # Tx-Rx distances (m)
    pdr:       np.ndarray
    delta_sen: np.ndarray   # received power below the sensing threshold
    delta_rxb: np.ndarray   # receiver busy with another packet
    delta_pro: np.ndarray   # propagation effects (insufficient SNR)
    delta_col: np.ndarray   # packet collisions
    cbr:       float

    def as_tuple(self):
        return self.pdr, self.delta_sen, self.delta_rxb, self.delta_pro, self.delta_col, self.cbr


def chain_errors(distance_m, delta_sen_pre, delta_rxb_pre, delta_pro_pre, delta_col_pre) -> DistanceErrors:
    """
    A packet can only be lost for a reason if it was not lost for any of the
    previous ones, in the order SEN, RXB, PRO, COL.
    """
    delta_sen = delta_sen_pre
    delta_rxb = delta_rxb_pre * (1 - delta_sen_pre)
    delta_pro = delta_pro_pre * (1 - delta_sen_pre) * (1 - delta_rxb_pre)
    delta_col = delta_col_pre * (1 - delta_sen_pre) * (1 - delta_rxb_pre) * (1 - delta_pro_pre)
    return DistanceErrors(distance_m, delta_sen, delta_rxb, delta_pro, delta_col)


def evaluate_distance(ctx: RunContext, distance_m: float) -> DistanceErrors:
    """Probability of each type of error for one Tx-Rx distance."""
    budget = link_budget(ctx, distance_m)
    delta_rxb_pre, delta_col_pre, _ = interference_errors(ctx, budget)
    check_probability("deltaRXB_pre", delta_rxb_pre)
    check_probability("deltaCOL_pre", delta_col_pre)

    errors = chain_errors(distance_m, budget.delta_sen_pre, delta_rxb_pre,
                          budget.delta_pro_pre, delta_col_pre)
    check_probability("PDR", errors.pdr)
    logger.debug("d=%g m: SEN=%.4f RXB=%.4f PRO=%.4f COL=%.4f PDR=%.4f", distance_m,
                 errors.delta_sen, errors.delta_rxb, errors.delta_pro, errors.delta_col, errors.pdr)
    return errors


def model80211p(beta, lambda_, pt, packet_size, data_rate, distances=None) -> ModelResult:
    """
    Evaluate the analytical model for one configuration.

    Args:
        beta: traffic density in veh/m
        lambda_: packet transmission frequency in Hz
        pt: transmission power in dBm
        packet_size: packet size in bytes
        data_rate: data rate in bits/s
        distances: Tx-Rx distances in meters (default 0:25:500)

    Returns:
        ModelResult with PDR, deltaSEN, deltaRXB, deltaPRO, deltaCOL and CBR
    """
    link = LinkParameters(beta, lambda_, pt, packet_size, data_rate)
    distances = DISTANCE_TX_TO_RX if distances is None else np.asarray(distances, dtype=float)
    logger.info("Input parameters: beta=%g veh/m, lambda=%g Hz, Pt=%g dBm, B=%d bytes, Rd=%g Mbps",
                beta, lambda_, pt, packet_size, data_rate / 1e6)

    # CBR and R_PSR are needed by every distance
    ctx = build_run_context(link)

    per_distance = [evaluate_distance(ctx, float(d)) for d in distances]

    result = ModelResult(
        link=link,
        distances=np.asarray(distances, dtype=float),
        pdr=np.array([e.pdr for e in per_distance]),
        delta_sen=np.array([e.delta_sen for e in per_distance]),
        delta_rxb=np.array([e.delta_rxb for e in per_distance]),
        delta_pro=np.array([e.delta_pro for e in per_distance]),
        delta_col=np.array([e.delta_col for e in per_distance]),
        cbr=ctx.cbr,
    )
    total = result.delta_sen + result.delta_rxb + result.delta_pro + result.delta_col
    if np.any(total > 1 + 1e-9):
        raise ModelConsistencyError(f"Error probabilities add up to more than 1: {total}")
    return result


def run_scenario(params: dict = None) -> ModelResult:
    """Run the model on default_params updated with `params`."""
    cfg = default_params.copy()
    if params:
        cfg.update(params)
    return model80211p(cfg['beta'], cfg['lambda_'], cfg['pt'], cfg['packet_size'],
                       cfg['data_rate'], cfg.get('distances'))
