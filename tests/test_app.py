"""
Tests for the Flask front-end.
"""

import pytest

from app import app, read_params


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_index_page(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'Traffic density' in response.data


def test_read_params_converts_mbps():
    params = read_params({'beta': '0.06', 'lambda': '10', 'pt': '23', 'packet_size': '190', 'data_rate': '6'})
    assert params == {'beta': 0.06, 'lambda_': 10.0, 'pt': 23.0, 'packet_size': 190, 'data_rate': 6e6}


@pytest.mark.parametrize("form", [
    {'beta': '0', 'lambda': '10', 'pt': '23', 'packet_size': '190', 'data_rate': '6'},
    {'beta': 'abc', 'lambda': '10', 'pt': '23', 'packet_size': '190', 'data_rate': '6'},
    {'beta': '0.06', 'lambda': '10', 'pt': '23', 'packet_size': '190'},
])
def test_invalid_form(client, form):
    response = client.post('/', data=form)
    assert response.status_code == 400
    assert b'Invalid parameters' in response.data
