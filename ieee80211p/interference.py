# ieee80211p/interference.py
"""
Receiver-busy (RXB) and collision (COL) errors caused by the vehicles
around the receiver.

Every potential interferer is evaluated on its own and produces an
InterfererContribution; the contributions of all of them are then combined
assuming independence: delta = 1 - prod(1 - p_i).
"""

from dataclasses import dataclass
from enum import Enum
import logging
import math

import numpy as np

from channel_load.occupancy import occupancy_correction
from ieee80211p.channel import get_pathloss, packet_sensing_ratio
from ieee80211p.config import MAX_INTERFERER_RANGE_M
from ieee80211p.context import RunContext
from ieee80211p.errors import ModelConsistencyError, check_probability
from ieee80211p.frame_error import average_fer
from ieee80211p.link_budget import LinkBudget
from ieee80211p.sinr import sinr_distribution

logger = logging.getLogger(__name__)

# deltaPRO_pre this close to 1 is a certain propagation error
CERTAIN_ERROR_TOL = 1e-12


class Relation(Enum):
    # interferer closer to the receiver than the transmitter is
    NEARER_RECEIVER = 'nearer_receiver'
    # interferer at least as far from the receiver as the transmitter
    NEARER_TRANSMITTER = 'nearer_transmitter'


@dataclass(frozen=True)
class InterfererContribution:
    offset_m: float     # signed position relative to the receiver
    relation: Relation
    p_int:    float     # packet lost if the interferer overlaps it
    p_rxb_ct: float
    p_rxb_ht: float
    p_col_ct: float
    p_col_ht: float

    @property
    def p_rxb(self) -> float:
        return self.p_rxb_ct + self.p_rxb_ht

    @property
    def p_col(self) -> float:
        return self.p_col_ct + self.p_col_ht


def interferer_ensemble(beta, max_range_m=MAX_INTERFERER_RANGE_M) -> np.ndarray:
    """
    Positions of the interfering vehicles relative to the receiver, spaced
    1/beta and up to ~max_range_m on each side, receiver excluded.
    """
    n_side = int(math.floor(max_range_m * beta + 0.5))
    l_int_max = n_side / beta
    offsets = -l_int_max + np.arange(2 * n_side + 1) / beta
    # the middle position is the receiver itself
    return np.delete(offsets, n_side)


def relation_of(offset_m, distance_tx_to_rx) -> Relation:
    if abs(offset_m) < abs(distance_tx_to_rx):
        return Relation.NEARER_RECEIVER
    return Relation.NEARER_TRANSMITTER


def interference_error(ctx: RunContext, budget: LinkBudget, pl_i_rx, std_dev_i_rx) -> float:
    """
    Probability that a packet sensed and decodable without interference is
    lost because of the interferer alone.
    """
    if budget.delta_pro_pre >= 1.0 - CERTAIN_ERROR_TOL:
        # A propagation error is certain, nothing left to collide
        return 0.0

    pt = ctx.link.pt
    sinr, pdf_sinr = sinr_distribution(budget.rx_power_dbm, pt - pl_i_rx, budget.std_dev_db, std_dev_i_rx,
                                       ctx.noise_dbm, ctx.psen_dbm, ctx.step_db)
    p_sinr = average_fer(sinr + ctx.eb_no_offset_db, pdf_sinr, ctx.step_db)
    p_int = (p_sinr - budget.delta_pro_pre) / (1 - budget.delta_pro_pre)
    # An interferer can only add errors, the residue is integration noise
    return min(max(p_int, 0.0), 1.0)


def interferer_contribution(ctx: RunContext, budget: LinkBudget, offset_m: float) -> InterfererContribution:
    """
    RXB and COL probabilities caused by the vehicle at `offset_m` from the
    receiver, for a transmitter at budget.distance_m.
    """
    pt = ctx.link.pt
    lambda_ = ctx.link.lambda_
    distance_i_tx = offset_m + budget.distance_m

    pl_i_rx, std_dev_i_rx = get_pathloss(abs(offset_m))
    pl_i_tx, std_dev_i_tx = get_pathloss(abs(distance_i_tx))

    p_int = interference_error(ctx, budget, pl_i_rx, std_dev_i_rx)

    # Detection of the interferer by the receiver and by the transmitter
    p_det_i_rx = packet_sensing_ratio(pt, pl_i_rx, std_dev_i_rx, ctx.psen_dbm)
    p_det_i_tx = packet_sensing_ratio(pt, pl_i_tx, std_dev_i_tx, ctx.psen_dbm)

    correction = occupancy_correction(ctx.cbr, ctx.r_psr, distance_i_tx)
    if correction <= 0:
        raise ModelConsistencyError(f"Occupancy correction {correction} at {distance_i_tx} m")

    relation = relation_of(offset_m, budget.distance_m)

    # Concurrent transmissions (both start in the same slot)
    p_sim_ct = ctx.slot_time_s * lambda_ * p_det_i_tx / correction
    # Hidden terminal: the interferer does not sense the transmitter
    p_sim_ht = ctx.ttr_s * lambda_ * (1 - p_det_i_tx) / correction

    if relation is Relation.NEARER_RECEIVER:
        p_rxb_ct = p_sim_ct * p_det_i_rx
        p_col_ct = 0.0
    else:
        p_rxb_ct = 0.0
        p_col_ct = p_int * p_sim_ct

    p_rxb_ht = ctx.ttr_s * lambda_ * p_det_i_rx * (1 - p_det_i_tx) / correction
    p_col_ht = p_int * p_sim_ht + p_int * p_sim_ht * (1 - p_det_i_rx)

    return InterfererContribution(
        offset_m=float(offset_m),
        relation=relation,
        p_int=p_int,
        p_rxb_ct=p_rxb_ct,
        p_rxb_ht=p_rxb_ht,
        p_col_ct=p_col_ct,
        p_col_ht=p_col_ht,
    )


def aggregate(contributions):
    """
    Combine independent interferers.

    Returns:
        (delta_rxb_pre, delta_col_pre)
    """
    p_rxb = np.array([c.p_rxb for c in contributions], dtype=float)
    p_col = np.array([c.p_col for c in contributions], dtype=float)
    check_probability("p_RXB", p_rxb)
    check_probability("p_COL", p_col)
    delta_rxb_pre = 1 - float(np.prod(1 - p_rxb))
    delta_col_pre = 1 - float(np.prod(1 - p_col))
    return delta_rxb_pre, delta_col_pre


def interference_errors(ctx: RunContext, budget: LinkBudget):
    """
    RXB and COL error probabilities (before chaining) at one Tx-Rx distance.

    Returns:
        (delta_rxb_pre, delta_col_pre, contributions)
    """
    contributions = [interferer_contribution(ctx, budget, offset)
                     for offset in interferer_ensemble(ctx.link.beta)]
    delta_rxb_pre, delta_col_pre = aggregate(contributions)
    logger.debug("d=%g m: %d interferers, deltaRXB_pre=%.4g, deltaCOL_pre=%.4g",
                 budget.distance_m, len(contributions), delta_rxb_pre, delta_col_pre)
    return delta_rxb_pre, delta_col_pre, contributions
