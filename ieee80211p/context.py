# ieee80211p/context.py

from dataclasses import dataclass, field
import logging
import math

import numpy as np

from channel_load.transmission_time import transmission_time
from channel_load.channel_utilization import channel_utilization
from channel_load.channel_busy_ratio import channel_busy_ratio
from channel_load.occupancy import psr_autocorrelation
from ieee80211p.channel import get_pathloss, packet_sensing_ratio
from ieee80211p.config import (
    BANDWIDTH_HZ, SENSING_THRESHOLD_DBM, NOISE_DBM, STEP_DB, SLOT_TIME_S,
    PSR_GRID_HALF_SPAN_M,
)
from ieee80211p.errors import check_probability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkParameters:
    beta:        float   # traffic density (veh/m)
    lambda_:     float   # packet transmission frequency (Hz)
    pt:          float   # transmission power (dBm)
    packet_size: int     # packet size (bytes)
    data_rate:   float   # data rate (bits/s)

    def __post_init__(self):
        if not self.beta > 0:
            raise ValueError(f"Traffic density must be positive, got {self.beta}")
        if not self.lambda_ > 0:
            raise ValueError(f"Packet transmission frequency must be positive, got {self.lambda_}")
        if not math.isfinite(self.pt):
            raise ValueError(f"Transmission power must be finite, got {self.pt}")
        if int(self.packet_size) != self.packet_size or self.packet_size <= 0:
            raise ValueError(f"Packet size must be a positive integer, got {self.packet_size}")
        if not self.data_rate > 0:
            raise ValueError(f"Data rate must be positive, got {self.data_rate}")

    def label(self) -> str:
        return (f"{self.beta * 1000:g} veh/km, {self.lambda_:g} pkt/s, {self.data_rate / 1e6:g} Mbps, "
                f"{self.pt:g} dBm, {int(self.packet_size)} Bytes")


@dataclass(frozen=True, eq=False)
class RunContext:
    """
    Everything the per-distance computation needs once the channel load is
    known: the link parameters, the packet duration, the CBR and the
    normalised PSR autocorrelation R_PSR (index = lag in meters).
    """
    link:         LinkParameters
    ttr_s:        float
    cbr:          float
    utilization:  float
    r_psr:        np.ndarray = field(repr=False)
    step_db:      float = STEP_DB
    bandwidth_hz: float = BANDWIDTH_HZ
    psen_dbm:     float = SENSING_THRESHOLD_DBM
    noise_dbm:    float = NOISE_DBM
    slot_time_s:  float = SLOT_TIME_S

    @property
    def eb_no_offset_db(self) -> float:
        # Eb/No = SINR + 10·log10(BW / Rd)
        return 10 * math.log10(self.bandwidth_hz / self.link.data_rate)


def psr_profile(pt_dbm, psen_dbm=SENSING_THRESHOLD_DBM, half_span_m=PSR_GRID_HALF_SPAN_M):
    """
    Packet Sensing Ratio every meter on [-half_span_m, half_span_m].

    Returns:
        (distances, psr)
    """
    d_aux = np.arange(-half_span_m, half_span_m + 1)
    pl, std_dev = get_pathloss(d_aux)
    return d_aux, packet_sensing_ratio(pt_dbm, pl, std_dev, psen_dbm)


def build_run_context(link: LinkParameters) -> RunContext:
    """
    Characterise the channel load of a configuration: PSR, channel
    utilization, CBR and the PSR autocorrelation.
    """
    ttr = transmission_time(link.packet_size, link.data_rate)

    # 1) PSR around the vehicle
    _, psr = psr_profile(link.pt)
    check_probability("PSR", psr)

    # 2) CBR from the channel utilization
    u = channel_utilization(link.beta, link.lambda_, ttr, psr)
    cbr = check_probability("CBR", channel_busy_ratio(u))

    # 3) Normalised autocorrelation of the PSR
    r_psr = psr_autocorrelation(psr)
    r_psr.setflags(write=False)

    logger.info("Ttr = %.1f us, channel utilization = %.4f, CBR = %.4f", ttr * 1e6, u, cbr)
    return RunContext(link=link, ttr_s=ttr, cbr=cbr, utilization=u, r_psr=r_psr)
