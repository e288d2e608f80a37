"""Tests for the JSON API."""

import pytest

from taiwan_plume.spread_engine import SpreadParameters, base_radius


class TestCatalogEndpoints:

    def test_plants(self, client):
        resp = client.get('/plants')
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['count'] == 4
        assert {p['plant_id'] for p in data['plants']} == {'chinshan', 'kuosheng', 'maanshan', 'lungmen'}

    def test_counties(self, client):
        data = client.get('/counties').get_json()
        assert data['count'] == 22
        assert data['evacuation_difficulty']['EXTREME'] == 2.5

    def test_seasons(self, client):
        data = client.get('/seasons?month=1').get_json()
        assert data['current'] == 'winter'
        assert data['seasons']['winter']['direction'] == 45
        assert data['seasons']['winter']['direction_label'] == 'NE'


class TestSpreadEndpoint:

    def test_spread(self, client):
        resp = client.post('/spread', json={
            'plant': 'chinshan',
            'wind': {'direction': 45, 'speed': 30},
            'simulation_minutes': 60,
            'mode': 'natural',
            'environment': 'rural',
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert len(data['polygon']) == 36
        assert data['diffusion_coefficient'] == 0.20
        expected = base_radius(3600, SpreadParameters.for_environment('rural'))
        assert data['base_radius_m'] == pytest.approx(expected)
        assert data['wind_influence_m'] == 0.0

    def test_explicit_origin_and_season(self, client):
        resp = client.post('/spread', json={
            'origin': [25.0, 121.0],
            'season': 'summer',
            'elapsed_sec': 600,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['wind']['direction'] == 225
        assert data['mode'] == 'combined'

    def test_param_override(self, client):
        data = client.post('/spread', json={
            'origin': {'lat': 25.0, 'lng': 121.0},
            'wind': {'direction': 0, 'speed': 0},
            'elapsed_sec': 0,
            'params': {'min_radius_m': 2500},
        }).get_json()
        assert data['base_radius_m'] == 2500

    def test_unknown_plant(self, client):
        resp = client.post('/spread', json={'plant': 'Fukushima', 'elapsed_sec': 0})
        assert resp.status_code == 404

    @pytest.mark.parametrize("body", [
        {'origin': [95, 121], 'elapsed_sec': 0},
        {'origin': [25, 121], 'elapsed_sec': -10},
        {'origin': [25, 121], 'elapsed_sec': 10, 'mode': 'sideways'},
        {'origin': [25, 121], 'elapsed_sec': 10, 'wind': {'direction': 'north'}},
        {'origin': [25, 121], 'elapsed_sec': 10, 'params': {'blast_speed_mps': 0}},
        {'origin': [25, 121], 'elapsed_sec': 10, 'params': {'colour': 1}},
        {'origin': [25, 121], 'elapsed_sec': 10, 'environment': 'desert'},
        {'elapsed_sec': 10},
    ])
    def test_invalid_input(self, client, body):
        resp = client.post('/spread', json=body)
        assert resp.status_code == 400
        assert 'error' in resp.get_json()

    def test_no_body(self, client):
        assert client.post('/spread').status_code == 400


class TestArrivalEndpoint:

    def test_reached(self, client):
        data = client.post('/arrival', json={
            'origin': [25.0, 121.0],
            'target': [25.1, 121.0],
            'wind': {'direction': 0, 'speed': 0},
            'environment': 'rural',
            'params': {'diffusion_coeff_m2_per_sec': 2.0},
            'elapsed_sec': 0,
        }).get_json()
        assert data['reached'] is True
        assert data['arrival_sec'] > 30
        assert data['remaining_sec'] == data['arrival_sec']
        assert data['severity'] in ('warning', 'danger', 'safe')

    def test_arrived_already(self, client):
        data = client.post('/arrival', json={
            'origin': [25.0, 121.0],
            'target': [25.0, 121.0],
            'wind': {'direction': 0, 'speed': 0},
            'elapsed_sec': 100,
            'evacuation_difficulty': 'EXTREME',
        }).get_json()
        assert data['remaining_sec'] == 0
        assert data['remaining'] == '00:00:00:00'
        assert data['severity'] == 'danger'

    def test_not_reached(self, client):
        data = client.post('/arrival', json={
            'origin': [25.0, 121.0],
            'target': [20.5, 121.0],
            'wind': {'direction': 0, 'speed': 0},
            'elapsed_sec': 0,
        }).get_json()
        assert data['reached'] is False
        assert data['arrival_sec'] is None
        assert data['remaining'] == 'N/A'
        assert data['severity'] == 'safe'

    def test_missing_target(self, client):
        resp = client.post('/arrival', json={'origin': [25.0, 121.0], 'elapsed_sec': 0})
        assert resp.status_code == 400


class TestSeverityEndpoint:

    def test_boundary(self, client):
        data = client.post('/severity', json={'hours': 6.01}).get_json()
        assert data['severity'] == 'warning'
        assert data['adjusted_hours'] == 6

    def test_difficulty_level(self, client):
        data = client.post('/severity', json={'hours': 12, 'evacuation_difficulty': 'extreme'}).get_json()
        assert data['severity'] == 'danger'

    def test_invalid(self, client):
        assert client.post('/severity', json={'hours': 'soon'}).status_code == 400
        assert client.post('/severity', json={'multiplier': 1}).status_code == 400
        assert client.post('/severity', json={'hours': 3, 'multiplier': 0}).status_code == 400


class TestCountyImpactEndpoint:

    def test_summary(self, client):
        resp = client.post('/counties/impact', json={
            'plant': 'kuosheng',
            'season': 'winter',
            'simulation_minutes': 120,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert data['count'] == 22
        assert sum(data['summary'].values()) == 22
        assert all('remaining' in c for c in data['counties'])
