# ieee80211p/config.py

import numpy as np

# Radio propagation model (WINNER+ B1)
CARRIER_FREQUENCY_HZ = 5.89e9
TX_ANTENNA_HEIGHT_M = 1.5
RX_ANTENNA_HEIGHT_M = 1.5
ENVIRONMENT_HEIGHT_M = 0.5
SPEED_OF_LIGHT = 3e8
MIN_DISTANCE_M = 3.0
SHADOWING_STD_DB = 3.0

# Radio interface
BANDWIDTH_HZ = 10e6           # channel bandwidth
SENSING_THRESHOLD_DBM = -85   # Psen
NOISE_DBM = -95               # background noise in 10 MHz, noise figure 9 dB
STEP_DB = 0.1                 # resolution of the SNR/SINR distributions

# 802.11-2012 MAC/PHY timing
SLOT_TIME_S = 13e-6           # aSlotTime
HEADER_BYTES = 30             # MAC + upper layer headers
PHY_OVERHEAD_S = 40e-6        # T_preamble (32 us) + T_signal (8 us)

# Channel Busy Ratio calibration: CBR = a*u^2 + b*u + c
CBR_COEFFICIENTS = (-0.2481, 0.913, 0.003844)

# Grid used to characterise the PSR and its autocorrelation (1 m resolution)
PSR_GRID_HALF_SPAN_M = 1500

# Interfering vehicles are considered up to this distance from the receiver
MAX_INTERFERER_RANGE_M = 1000

# Tx-Rx distances at which the metrics are reported
DISTANCE_TX_TO_RX = np.arange(0, 501, 25)

# FER vs Eb/No for 802.11p, Fig. 14 (L=1) of Goubet et al., IEEE TVT 2015.
# The first and last anchors are replaced at run time by the edges of the
# evaluated Eb/No range.
FER_LUT_EB_NO_DB = [-1, 0, 5, 10, 15, 20, 25, 30, 35, 36]
FER_LUT_FER = [1, 1, 1, 0.4, 1.5e-2, 4e-3, 3e-3, 2e-3, 1e-3, 1e-3]

# Default run (beta veh/m, lambda Hz, Pt dBm, B bytes, Rd bit/s)
default_params = {
    'beta':         0.06,
    'lambda_':      10,
    'pt':           23,
    'packet_size':  190,
    'data_rate':    6e6,
}

# Configurations evaluated in the paper (beta, lambda, Pt, B, Rd)
PAPER_CONFIGURATIONS = [
    (0.06, 10, 23, 190, 6e6),
    (0.06, 10, 23, 190, 18e6),
    (0.06, 10, 23, 190, 27e6),

    (0.12, 25, 23, 190, 6e6),
    (0.12, 25, 23, 190, 18e6),
    (0.12, 25, 23, 190, 27e6),

    (0.06, 10, 15, 190, 6e6),
    (0.06, 10, 23, 190, 6e6),
    (0.06, 10, 30, 190, 6e6),

    (0.12, 25, 15, 190, 6e6),
    (0.12, 25, 23, 190, 6e6),
    (0.12, 25, 30, 190, 6e6),

    (0.06, 10, 23, 190, 6e6),
    (0.06, 10, 23, 500, 6e6),
]

# Folder with the simulation traces used for validation
SIMULATIONS_DIR = 'simulations'
