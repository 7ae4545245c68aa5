"""
End-to-end tests of the analytical model.
"""

import numpy as np
import pytest

from ieee80211p.config import DISTANCE_TX_TO_RX
from ieee80211p.context import LinkParameters, build_run_context
from ieee80211p.model import chain_errors, model80211p, run_scenario


@pytest.fixture(scope="module")
def paper_result():
    """0.06 veh/m, 10 Hz, 23 dBm, 190 bytes, 6 Mbps."""
    return model80211p(0.06, 10, 23, 190, 6e6)


def test_outputs_aligned_to_distance_grid(paper_result):
    np.testing.assert_array_equal(paper_result.distances, DISTANCE_TX_TO_RX)
    pdr, sen, rxb, pro, col, cbr = paper_result.as_tuple()
    for values in (pdr, sen, rxb, pro, col):
        assert values.shape == (21,)
        assert np.all(np.isfinite(values))
    assert isinstance(cbr, float)


def test_probabilities_are_consistent(paper_result):
    r = paper_result
    total = r.delta_sen + r.delta_rxb + r.delta_pro + r.delta_col
    assert np.all(total <= 1 + 1e-9)
    assert np.all((r.pdr >= 0) & (r.pdr <= 1))
    for values in (r.delta_sen, r.delta_rxb, r.delta_pro, r.delta_col):
        assert np.all((values >= 0) & (values <= 1))
    np.testing.assert_allclose(r.pdr, 1 - total)


def test_pdr_degrades_with_distance(paper_result):
    pdr = paper_result.pdr
    assert pdr[0] > 0.8
    assert pdr[-1] < 0.1
    assert np.all(np.diff(pdr) <= 0.02)


def test_cbr_of_reference_configuration(paper_result):
    assert 0.08 < paper_result.cbr < 0.13


def test_cbr_grows_with_density_and_rate():
    base = build_run_context(LinkParameters(0.06, 10, 23, 190, 6e6)).cbr
    denser = build_run_context(LinkParameters(0.12, 10, 23, 190, 6e6)).cbr
    faster = build_run_context(LinkParameters(0.06, 25, 23, 190, 6e6)).cbr
    assert 0 <= base <= denser <= 1
    assert base <= faster <= 1


def test_deterministic():
    first = model80211p(0.12, 25, 23, 190, 6e6, distances=[0, 250, 500])
    second = model80211p(0.12, 25, 23, 190, 6e6, distances=[0, 250, 500])
    for a, b in zip(first.as_tuple(), second.as_tuple()):
        np.testing.assert_array_equal(a, b)


def test_run_scenario_overrides_defaults():
    res = run_scenario({'pt': 30, 'distances': [0, 500]})
    assert res.link.pt == 30
    assert res.link.beta == 0.06
    assert len(res.pdr) == 2
    assert np.all(np.isfinite(res.pdr))


def test_chain_errors():
    """Each error only applies to packets that survived the previous ones."""
    e = chain_errors(100, 0.1, 0.2, 0.3, 0.4)
    assert e.delta_sen == pytest.approx(0.1)
    assert e.delta_rxb == pytest.approx(0.18)
    assert e.delta_pro == pytest.approx(0.216)
    assert e.delta_col == pytest.approx(0.2016)
    assert e.pdr == pytest.approx(0.9 * 0.8 * 0.7 * 0.6)


@pytest.mark.parametrize("params", [
    (0, 10, 23, 190, 6e6),
    (0.06, -1, 23, 190, 6e6),
    (0.06, 10, float('nan'), 190, 6e6),
    (0.06, 10, 23, 190.5, 6e6),
    (0.06, 10, 23, 190, 0),
])
def test_invalid_parameters(params):
    with pytest.raises(ValueError):
        model80211p(*params)
