# ieee80211p/link_budget.py

from dataclasses import dataclass

from ieee80211p.channel import get_pathloss, sensing_error
from ieee80211p.context import RunContext
from ieee80211p.errors import check_probability
from ieee80211p.frame_error import average_fer
from ieee80211p.sinr import sinr_distribution


@dataclass(frozen=True)
class LinkBudget:
    distance_m:    float
    pl_db:         float
    std_dev_db:    float
    rx_power_dbm:  float
    delta_sen_pre: float   # received power below the sensing threshold
    delta_pro_pre: float   # insufficient SNR without interference


def link_budget(ctx: RunContext, distance_m: float) -> LinkBudget:
    """
    Errors caused by propagation alone at a Tx-Rx distance: the packet is not
    sensed (SEN) or it is sensed but its SNR is too low to decode it (PRO).
    """
    pt = ctx.link.pt
    pl, std_dev = get_pathloss(distance_m)

    delta_sen_pre = sensing_error(pt, pl, std_dev, ctx.psen_dbm)

    # SNR distribution (no interferer) converted to Eb/No, same distribution
    snr, pdf_snr = sinr_distribution(pt - pl, float('-inf'), std_dev, std_dev,
                                     ctx.noise_dbm, ctx.psen_dbm, ctx.step_db)
    eb_no = snr + ctx.eb_no_offset_db
    delta_pro_pre = average_fer(eb_no, pdf_snr, ctx.step_db)

    return LinkBudget(
        distance_m=distance_m,
        pl_db=pl,
        std_dev_db=std_dev,
        rx_power_dbm=pt - pl,
        delta_sen_pre=check_probability("deltaSEN_pre", delta_sen_pre),
        delta_pro_pre=check_probability("deltaPRO_pre", delta_pro_pre),
    )
