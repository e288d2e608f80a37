"""Tests for distances, bearings and the flat-Earth projection."""

import math

import pytest

from taiwan_plume.errors import InvalidInput
from taiwan_plume.geo_utils import (
    GeoPoint,
    angular_diff,
    bearing,
    destination,
    great_circle_distance_km,
    haversine,
    plume_angle,
)


class TestGeoPoint:

    def test_valid_point(self):
        p = GeoPoint(25.286, 121.595)
        assert p.to_pair() == [25.286, 121.595]

    @pytest.mark.parametrize("lat,lng", [(91, 0), (-90.5, 0), (0, 181), (0, -180.1)])
    def test_out_of_range_rejected(self, lat, lng):
        with pytest.raises(InvalidInput):
            GeoPoint(lat, lng)

    def test_nan_rejected(self):
        with pytest.raises(InvalidInput):
            GeoPoint(float('nan'), 121.0)

    def test_from_pair(self):
        assert GeoPoint.from_pair(["25.0", 121]) == GeoPoint(25.0, 121.0)

    @pytest.mark.parametrize("pair", [["a", 1], [1], None, [1, 2, 3]])
    def test_from_pair_malformed(self, pair):
        with pytest.raises(InvalidInput):
            GeoPoint.from_pair(pair)

    def test_points_are_immutable(self):
        p = GeoPoint(25.0, 121.0)
        with pytest.raises(AttributeError):
            p.lat = 10.0


class TestGreatCircleDistance:

    def test_tenth_of_a_degree_of_latitude(self, origin, target_north):
        assert great_circle_distance_km(origin, target_north) == pytest.approx(11.1195, abs=1e-3)

    def test_symmetric(self):
        taipei = GeoPoint(25.033, 121.565)
        kaohsiung = GeoPoint(22.627, 120.301)
        assert great_circle_distance_km(taipei, kaohsiung) == great_circle_distance_km(kaohsiung, taipei)

    def test_taipei_to_kaohsiung(self):
        assert haversine(25.033, 121.565, 22.627, 120.301) == pytest.approx(297, abs=3)

    def test_zero_distance(self, origin):
        assert great_circle_distance_km(origin, origin) == 0


class TestBearing:

    @pytest.mark.parametrize("lat2,lon2,expected", [
        (26.0, 121.0, 0),
        (25.0, 122.0, 90),
        (24.0, 121.0, 180),
        (25.0, 120.0, 270),
    ])
    def test_cardinal_bearings(self, lat2, lon2, expected):
        assert bearing(25.0, 121.0, lat2, lon2) == pytest.approx(expected, abs=0.5)

    def test_angular_diff_wraps(self):
        assert angular_diff(350, 10) == 20
        assert angular_diff(10, 350) == 20
        assert angular_diff(90, 270) == 180


class TestDestination:

    def test_north(self, origin):
        p = destination(origin, 11100, plume_angle(0))
        assert p.lat == pytest.approx(25.1)
        assert p.lng == pytest.approx(121.0)

    def test_angle_zero_points_south(self, origin):
        p = destination(origin, 11100, 0.0)
        assert p.lat == pytest.approx(24.9)
        assert p.lng == pytest.approx(121.0)

    def test_east_scaled_by_latitude(self, origin):
        p = destination(origin, 11100, math.pi / 2)
        assert p.lat == pytest.approx(25.0)
        assert p.lng == pytest.approx(121.0 + 0.1 / math.cos(math.radians(25.0)))

    def test_projection_distance_close_to_haversine(self, origin):
        for bearing_deg in range(0, 360, 30):
            p = destination(origin, 20000, plume_angle(bearing_deg))
            assert great_circle_distance_km(origin, p) == pytest.approx(20.0, rel=0.01)

    def test_negative_distance_rejected(self, origin):
        with pytest.raises(InvalidInput):
            destination(origin, -1.0, 0.0)
