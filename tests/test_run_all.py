"""
Tests for the command line driver.
"""

from run_all import parse_args


def test_parse_single_configuration():
    args = parse_args(['--config', '0.06', '10', '23', '190', '6e6', '-v'])
    assert args.config == [0.06, 10.0, 23.0, 190.0, 6e6]
    assert args.verbose == 1
    assert args.figures is None


def test_parse_defaults():
    args = parse_args([])
    assert args.config is None
    assert args.simulations == 'simulations'
