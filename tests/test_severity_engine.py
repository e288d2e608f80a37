"""Tests for the danger / warning / safe classification."""

import pytest

from taiwan_plume.errors import InvalidInput
from taiwan_plume.severity_engine import (
    EVACUATION_DIFFICULTY,
    SeverityBand,
    adjusted_impact_hours,
    evacuation_multiplier,
    severity,
    summarize_bands,
)


class TestSeverity:

    @pytest.mark.parametrize("hours,band", [
        (0.0, SeverityBand.DANGER),
        (6.0, SeverityBand.DANGER),
        (6.01, SeverityBand.WARNING),
        (24.0, SeverityBand.WARNING),
        (24.01, SeverityBand.SAFE),
        (72.0, SeverityBand.SAFE),
    ])
    def test_thresholds(self, hours, band):
        assert severity(hours, 1.0) is band

    def test_default_multiplier(self):
        assert severity(12) is SeverityBand.WARNING

    def test_multiplier_stretches_urgency(self):
        assert severity(12, 1.0) is SeverityBand.WARNING
        assert severity(12, 2.5) is SeverityBand.DANGER
        assert severity(40, 1.0) is SeverityBand.SAFE
        assert severity(40, 2.0) is SeverityBand.WARNING

    def test_negative_time_clamped(self):
        assert severity(-3) is SeverityBand.DANGER

    def test_infinite_time_is_safe(self):
        assert severity(float('inf')) is SeverityBand.SAFE

    @pytest.mark.parametrize("multiplier", [0, -1.5, float('nan'), float('inf')])
    def test_invalid_multiplier(self, multiplier):
        with pytest.raises(InvalidInput):
            severity(10, multiplier)

    def test_nan_time(self):
        with pytest.raises(InvalidInput):
            severity(float('nan'))


class TestAdjustedHours:

    def test_floor(self):
        assert adjusted_impact_hours(7.9) == 7
        assert adjusted_impact_hours(10, 1.5) == 6

    def test_clamped(self):
        assert adjusted_impact_hours(-2) == 0


class TestEvacuationDifficulty:

    def test_levels(self):
        assert EVACUATION_DIFFICULTY == {'LOW': 1.0, 'MEDIUM': 1.5, 'HIGH': 2.0, 'EXTREME': 2.5}

    def test_case_insensitive(self):
        assert evacuation_multiplier('extreme') == 2.5
        assert evacuation_multiplier(' Medium ') == 1.5

    def test_unknown(self):
        with pytest.raises(InvalidInput):
            evacuation_multiplier('impossible')


class TestBands:

    def test_colors(self):
        assert SeverityBand.SAFE.color == '#4CAF50'
        assert SeverityBand.WARNING.color == '#FFA500'
        assert SeverityBand.DANGER.color == '#FF0000'

    def test_summary(self):
        bands = [SeverityBand.DANGER, 'danger', SeverityBand.SAFE]
        assert summarize_bands(bands) == {'safe': 1, 'warning': 0, 'danger': 2}

    def test_empty_summary(self):
        assert summarize_bands([]) == {'safe': 0, 'warning': 0, 'danger': 0}
