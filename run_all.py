"""
Runs the analytical model for all the configurations evaluated in the paper
(or for a single one given on the command line) and compares the results
with the simulation traces when they are available.
"""
import argparse
import logging
import os

import matplotlib.pyplot as plt

from ieee80211p.analysis import (
    load_simulation_traces, mean_absolute_deviation, cbr_relative_error,
    plot_pdr, plot_errors, plot_cbr,
)
from ieee80211p.config import PAPER_CONFIGURATIONS, SIMULATIONS_DIR
from ieee80211p.model import model80211p


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Analytical model of IEEE 802.11p V2V communications')
    parser.add_argument('--config', nargs=5, type=float, metavar=('BETA', 'LAMBDA', 'PT', 'B', 'RD'),
                        help='Single configuration: veh/m, Hz, dBm, bytes, bits/s')
    parser.add_argument('--simulations', default=SIMULATIONS_DIR,
                        help='Folder with the simulation traces (CSV)')
    parser.add_argument('--figures', default=None,
                        help='Save the PDR, error and CBR figures to this folder')
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='-v for INFO logs, -vv for DEBUG')
    return parser.parse_args(argv)


def report(beta, lambda_, pt, packet_size, data_rate, simulations_dir, figures_dir=None):
    print('=========================================================')
    print('Input parameters:')
    print(f'  beta   = {beta:f} veh/m')
    print(f'  lambda = {lambda_:g} Hz')
    print(f'  Pt     = {pt:g} dBm')
    print(f'  B      = {packet_size:d} bytes')
    print(f'  Rd     = {data_rate / 1e6:g} Mbps')

    result = model80211p(beta, lambda_, pt, packet_size, data_rate)
    traces = load_simulation_traces(result.link, simulations_dir)

    print('Output: ')
    if traces is None:
        print('  Equivalent simulation not available.')
        print(f'  CBR analytical: {result.cbr:.4f}')
    else:
        if traces.cbr is not None:
            print(f'  CBR simulation: {traces.cbr:.4f}')
            print(f'  CBR analytical: {result.cbr:.4f} ({cbr_relative_error(result.cbr, traces.cbr):.2f}% error)')
        else:
            print(f'  CBR analytical: {result.cbr:.4f}')
        mad = mean_absolute_deviation(result, traces)
        print('  Mean Absolute Deviation results: ')
        print('  PDR \tSEN \tRXB \tPRO \tCOL ')
        print('  ' + '\t'.join(f'{mad[k]:.2f}' for k in ['PDR', 'SEN', 'RXB', 'PRO', 'COL']))

    if figures_dir:
        os.makedirs(figures_dir, exist_ok=True)
        name = (f"{beta:g}vehm_{data_rate / 1e6:g}Mbps_{lambda_:g}Hz_Pt{pt:g}_{packet_size}Bytes")
        for prefix, plot in (('PDR', plot_pdr), ('ERRORS', plot_errors), ('CBR', plot_cbr)):
            fig = plot(result, traces)
            fig.savefig(os.path.join(figures_dir, f'{prefix}_{name}.png'))
            plt.close(fig)

    print('=========================================================')
    return result


def main(argv=None):
    args = parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    if args.config:
        beta, lambda_, pt, packet_size, data_rate = args.config
        configurations = [(beta, lambda_, pt, int(packet_size), data_rate)]
    else:
        configurations = PAPER_CONFIGURATIONS

    for beta, lambda_, pt, packet_size, data_rate in configurations:
        report(beta, lambda_, pt, packet_size, data_rate, args.simulations, args.figures)


if __name__ == '__main__':
    main()
