import numpy as np


def channel_utilization(beta: float, lambda_: float, ttr_s: float, psr) -> float:
    """
    Compute the channel utilization u = beta·lambda·Ttr·sum(PSR), i.e. the
    average number of transmissions sensed at a given instant.

    Args:
        beta: traffic density in veh/m
        lambda_: packet transmission frequency in Hz
        ttr_s: packet transmission time in seconds
        psr: Packet Sensing Ratio sampled every meter around the vehicle

    Returns:
        Channel utilization u
    """
    return beta * lambda_ * ttr_s * float(np.sum(psr))
