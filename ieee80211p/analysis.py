# ieee80211p/analysis.py

from dataclasses import dataclass
import logging
import os
from typing import Optional

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from ieee80211p.config import SIMULATIONS_DIR
from ieee80211p.context import LinkParameters
from ieee80211p.model import ModelResult

logger = logging.getLogger(__name__)

ERROR_COLUMNS = ['delta_sen', 'delta_rxb', 'delta_pro', 'delta_col']
METRIC_COLUMNS = ['pdr'] + ERROR_COLUMNS

# (label, analytical line style) of each error type
ERROR_STYLES = {
    'delta_pro': ('PRO', 'r--'),
    'delta_col': ('COL', 'k--'),
    'delta_rxb': ('RXB', 'g--'),
    'delta_sen': ('SEN', 'm--'),
}


@dataclass
class SimulationTraces:
    errors:  pd.DataFrame              # distance_m, delta_sen, delta_rxb, delta_pro, delta_col
    pdr:     pd.DataFrame              # distance_m, pdr
    cbr_pdf: Optional[pd.DataFrame]    # cbr, probability

    @property
    def cbr(self) -> Optional[float]:
        if self.cbr_pdf is None:
            return None
        return float((self.cbr_pdf['cbr'] * self.cbr_pdf['probability']).sum())


def build_dataframe(result: ModelResult) -> pd.DataFrame:
    df = pd.DataFrame({
        'distance_m': result.distances,
        'pdr': result.pdr,
        'delta_sen': result.delta_sen,
        'delta_rxb': result.delta_rxb,
        'delta_pro': result.delta_pro,
        'delta_col': result.delta_col,
    })
    return df


def trace_file_names(link: LinkParameters) -> dict:
    """
    File names of the simulation traces for a configuration, e.g.
    PDR_0.06vehm_6Mbps_10Hz_Pt23_190Bytes.csv
    """
    suffix = (f"{link.beta:g}vehm_{link.data_rate / 1e6:g}Mbps_{link.lambda_:g}Hz_"
              f"Pt{link.pt:g}_{int(link.packet_size)}Bytes.csv")
    return {
        'errors': 'ERRORS_' + suffix,
        'pdr': 'PDR_' + suffix,
        'cbr': 'CBR_' + suffix,
    }


def load_simulation_traces(link: LinkParameters, folder: str = SIMULATIONS_DIR) -> Optional[SimulationTraces]:
    """
    Load the simulation results of a configuration, if they exist.
    The CBR trace is optional.
    """
    names = trace_file_names(link)
    errors_path = os.path.join(folder, names['errors'])
    pdr_path = os.path.join(folder, names['pdr'])
    if not (os.path.exists(errors_path) and os.path.exists(pdr_path)):
        logger.info("Equivalent simulation not available for %s", link.label())
        return None

    errors = pd.read_csv(errors_path)
    pdr = pd.read_csv(pdr_path)
    cbr_path = os.path.join(folder, names['cbr'])
    cbr_pdf = pd.read_csv(cbr_path) if os.path.exists(cbr_path) else None

    missing = ({'distance_m'} | set(ERROR_COLUMNS)) - set(errors.columns)
    if missing or not {'distance_m', 'pdr'} <= set(pdr.columns):
        raise ValueError(f"Malformed simulation traces in {folder}: missing {sorted(missing) or ['pdr']}")
    return SimulationTraces(errors=errors, pdr=pdr, cbr_pdf=cbr_pdf)


def simulated_metrics(traces: SimulationTraces, distances) -> pd.DataFrame:
    """Simulation traces interpolated at the given distances."""
    distances = np.asarray(distances, dtype=float)
    df = pd.DataFrame({'distance_m': distances})
    pdr = traces.pdr.sort_values('distance_m')
    df['pdr'] = np.interp(distances, pdr['distance_m'], pdr['pdr'])
    errors = traces.errors.sort_values('distance_m')
    for col in ERROR_COLUMNS:
        df[col] = np.interp(distances, errors['distance_m'], errors[col])
    return df


def mean_absolute_deviation(result: ModelResult, traces: SimulationTraces) -> pd.Series:
    """
    Mean Absolute Deviation (percentage points) between the analytical model
    and the simulation for the PDR and each error type.
    """
    model_df = build_dataframe(result)
    sim_df = simulated_metrics(traces, result.distances)
    mad = (model_df[METRIC_COLUMNS] - sim_df[METRIC_COLUMNS]).abs().mean() * 100
    return mad.rename(index={'pdr': 'PDR', 'delta_sen': 'SEN', 'delta_rxb': 'RXB',
                             'delta_pro': 'PRO', 'delta_col': 'COL'})


def cbr_relative_error(cbr_model: float, cbr_sim: float) -> float:
    """Relative error (%) of the analytical CBR."""
    return 100 * abs(cbr_sim - cbr_model) / cbr_sim


def plot_pdr(result: ModelResult, traces: Optional[SimulationTraces] = None) -> plt.Figure:
    fig, ax = plt.subplots()
    legend = []
    if traces is not None:
        ax.plot(traces.pdr['distance_m'], traces.pdr['pdr'], 'b-')
        legend.append('Simulation')
    ax.plot(result.distances, result.pdr, 'b--', linewidth=2)
    legend.append('Analytical')
    ax.set_ylim(0, 1)
    ax.set_title(result.link.label())
    ax.set_xlabel('Distance Tx-Rx (m)')
    ax.set_ylabel('PDR')
    ax.legend(legend)
    return fig


def plot_errors(result: ModelResult, traces: Optional[SimulationTraces] = None) -> plt.Figure:
    fig, ax = plt.subplots()
    if traces is not None:
        for col, (label, style) in ERROR_STYLES.items():
            ax.plot(traces.errors['distance_m'], traces.errors[col], style[0] + '-', label=f'{label} sim')
    for col, (label, style) in ERROR_STYLES.items():
        ax.plot(result.distances, getattr(result, col), style, linewidth=2, label=f'{label} analit')
    ax.set_ylim(0, 1)
    ax.set_title(result.link.label())
    ax.set_xlabel('Distance Tx-Rx (m)')
    ax.set_ylabel('Probability')
    ax.legend(loc='upper left')
    return fig


def plot_cbr(result: ModelResult, traces: Optional[SimulationTraces] = None) -> plt.Figure:
    fig, ax = plt.subplots()
    if traces is not None and traces.cbr_pdf is not None:
        ax.bar(traces.cbr_pdf['cbr'], traces.cbr_pdf['probability'], width=0.01, label='Simulation')
    ax.stem([result.cbr], [1], linefmt='b-', markerfmt='bo', basefmt=' ', label='Analytical')
    ax.set_xlim(0, 1)
    ax.set_title(result.link.label())
    ax.set_xlabel('CBR')
    ax.set_ylabel('Probability')
    ax.legend()
    return fig
