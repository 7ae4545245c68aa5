from ieee80211p.config import HEADER_BYTES, PHY_OVERHEAD_S


def transmission_time(packet_size_bytes: int, data_rate_bps: float,
                      header_bytes: int = HEADER_BYTES, phy_overhead_s: float = PHY_OVERHEAD_S) -> float:
    """
    Compute the duration of a packet transmission in 802.11-2012:
    T_preamble + T_signal + (B + H)·8 / Rd.

    Args:
        packet_size_bytes: payload size B in bytes
        data_rate_bps: data rate Rd in bits/s
        header_bytes: length of the headers H in bytes
        phy_overhead_s: T_preamble + T_signal in seconds

    Returns:
        Transmission time Ttr in seconds
    """
    return phy_overhead_s + (packet_size_bytes + header_bytes) * 8 / data_rate_bps
