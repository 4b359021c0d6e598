"""Tests para core/hyetograph.py - Cálculo de hietogramas."""

import pytest
from pydantic import ValidationError

from gstorm.config import (
    INCH_TO_MM,
    CalculationRequest,
    DepthUnit,
    HyetographResult,
    StormCategory,
)
from gstorm.core.hyetograph import (
    calculate_hyetograph,
    empty_hyetograph,
    format_time_label,
    time_boundaries,
)
from gstorm.core.interpolation import interpolate
from gstorm.core.temporal import load_default_store


class TestTimeBoundaries:
    """Tests de discretización del tiempo."""

    def test_exact_multiple(self):
        assert time_boundaries(60, 15) == [0, 15, 30, 45, 60]

    def test_short_last_step(self):
        bounds = time_boundaries(60, 25)
        assert bounds == [0, 25, 50, 60]

    def test_step_longer_than_duration(self):
        assert time_boundaries(60, 90) == [0, 60]


class TestFormatTimeLabel:
    """Tests de etiquetas de tiempo."""

    def test_long_storm_uses_clock(self):
        assert format_time_label(90, 1440) == "1:30"
        assert format_time_label(1440, 1440) == "24:00"

    def test_short_storm_uses_minutes(self):
        assert format_time_label(30, 120) == "30m"


class TestCalculateHyetograph:
    """Tests con el almacén reducido de conftest."""

    def test_four_steps(self, small_store):
        request = CalculationRequest(total_depth=1.0, duration_hr=24, time_step_min=360)
        result = calculate_hyetograph(request, small_store)

        assert result.n_intervals == 4
        assert [s.depth_step for s in result.detailed_data] == pytest.approx([0.1, 0.2, 0.3, 0.4])
        assert result.intensity_data == pytest.approx([0.1 / 6, 0.2 / 6, 0.3 / 6, 0.4 / 6])
        assert result.peak_intensity == pytest.approx(0.4 / 6)
        assert result.total_depth_actual == pytest.approx(1.0)
        assert result.labels == ["0:00", "6:00", "12:00", "18:00", "24:00"]
        assert result.method == "SCS/Type II - 24HR"
        assert result.intensity_unit == "in/hr"
        assert result.depth_unit == "in"

    def test_cumulative_depth(self, small_store):
        request = CalculationRequest(total_depth=2.0, duration_hr=24, time_step_min=720)
        result = calculate_hyetograph(request, small_store)
        assert [s.cumulative_depth for s in result.detailed_data] == pytest.approx([0.6, 2.0])

    def test_interpolated_boundaries(self, small_store):
        """Límites entre puntos de la curva se interpolan linealmente."""
        request = CalculationRequest(total_depth=1.0, duration_hr=24, time_step_min=180)
        result = calculate_hyetograph(request, small_store)
        assert result.detailed_data[0].depth_step == pytest.approx(0.05)
        assert result.detailed_data[0].cumulative_depth == pytest.approx(0.05)

    def test_short_last_step(self, small_store):
        request = CalculationRequest(total_depth=1.0, duration_hr=6, time_step_min=7)
        result = calculate_hyetograph(request, small_store)

        assert result.n_intervals == 52
        last = result.detailed_data[-1]
        assert last.time_start == 357
        assert last.time_end == 360
        # Intensidad constante: el paso corto mantiene la misma intensidad
        assert last.intensity == pytest.approx(result.detailed_data[0].intensity)
        assert result.total_depth_actual == pytest.approx(1.0)

    def test_missing_distribution(self, small_store):
        request = CalculationRequest(total_depth=1.0, sub_type="Type III")
        result = calculate_hyetograph(request, small_store)

        assert result.is_empty
        assert result.detailed_data == []
        assert result.peak_intensity == 0
        assert result.intensity_unit == "N/A"

    def test_missing_duration(self, small_store):
        request = CalculationRequest(total_depth=1.0, duration_hr=12)
        assert calculate_hyetograph(request, small_store).is_empty

    def test_sub_type_from_other_category(self, small_store):
        request = CalculationRequest(
            total_depth=1.0, category=StormCategory.HUFF, sub_type="Type II"
        )
        assert calculate_hyetograph(request, small_store).is_empty

    def test_invalid_time_step_for_category(self, small_store):
        """SCS exige intervalos enteros; Huff solo 1 o 6 min."""
        scs = CalculationRequest(total_depth=1.0, time_step_min=2.5)
        huff = CalculationRequest(
            total_depth=1.0,
            category=StormCategory.HUFF,
            sub_type="Huff Type I",
            time_step_min=5,
        )
        assert calculate_hyetograph(scs, small_store).is_empty
        assert calculate_hyetograph(huff, small_store).is_empty

    def test_huff_valid(self, small_store):
        request = CalculationRequest(
            total_depth=1.0,
            category=StormCategory.HUFF,
            sub_type="Huff Type I",
            time_step_min=6,
        )
        result = calculate_hyetograph(request, small_store)
        assert result.n_intervals == 240
        assert result.method == "Huff/Huff Type I - 24HR"

    def test_non_positive_depth_rejected(self):
        with pytest.raises(ValidationError):
            CalculationRequest(total_depth=0.0)
        with pytest.raises(ValidationError):
            CalculationRequest(total_depth=-1.0)

    @pytest.mark.parametrize("depth", [-1.0, 0.0, float("nan"), float("inf")])
    def test_unvalidated_request_gets_sentinel(self, small_store, depth):
        """Solicitudes sin validar (model_construct) no lanzan excepciones."""
        request = CalculationRequest.model_construct(total_depth=depth)
        assert calculate_hyetograph(request, small_store).is_empty

    def test_unvalidated_unknown_unit(self, small_store):
        request = CalculationRequest.model_construct(total_depth=1.0, depth_unit="ft")
        assert calculate_hyetograph(request, small_store).is_empty

    def test_unvalidated_unit_as_text(self, small_store):
        request = CalculationRequest.model_construct(
            total_depth=25.4, depth_unit="metric", time_step_min=360.0
        )
        result = calculate_hyetograph(request, small_store)
        assert result.depth_unit == "mm"
        assert result.total_depth_actual == pytest.approx(25.4)

    def test_unvalidated_time_step(self, small_store):
        request = CalculationRequest.model_construct(total_depth=1.0, time_step_min=0.0)
        assert calculate_hyetograph(request, small_store).is_empty

    def test_empty_sentinel(self):
        result = empty_hyetograph()
        assert isinstance(result, HyetographResult)
        assert result.is_empty
        assert result.total_depth_actual == 0


class TestPackagedDistributions:
    """Tests con las tablas de referencia empaquetadas."""

    def test_type_ii_24hr(self, type_ii_request):
        result = calculate_hyetograph(type_ii_request)

        assert result.n_intervals == 1440 // 6
        assert len(result.labels) == result.n_intervals + 1
        assert result.peak_intensity > 0
        assert sum(s.depth_step for s in result.detailed_data) == pytest.approx(1.0, abs=1e-6)

    def test_type_ii_peak_near_midday(self, type_ii_request):
        result = calculate_hyetograph(type_ii_request)
        peak = max(result.detailed_data, key=lambda s: s.intensity)
        assert 660 <= peak.time_start < 720

    @pytest.mark.parametrize("sub_type,hours,fraction", [
        ("Type I", 9.75, 0.362),
        ("Type II", 11.75, 0.357),
        ("Type II", 12.0, 0.663),
        ("Type III", 11.75, 0.339),
    ])
    def test_quarter_hour_ordinates_near_peak(self, sub_type, hours, fraction):
        curve = load_default_store().get_curve(StormCategory.SCS, sub_type, 24)
        assert interpolate(hours * 60, curve.times, curve.cumulative_fraction) == pytest.approx(
            fraction, abs=1e-3
        )

    def test_type_ii_six_minute_peak(self, type_ii_request):
        """Entre 11:45 y 12:00 cae el 30.6% de la lluvia."""
        result = calculate_hyetograph(type_ii_request)
        assert result.peak_intensity == pytest.approx(0.306 / 0.25, rel=1e-3)

    def test_metric_equivalence(self, type_ii_request):
        us = calculate_hyetograph(type_ii_request)
        metric = calculate_hyetograph(type_ii_request.model_copy(update={
            "total_depth": INCH_TO_MM,
            "depth_unit": DepthUnit.METRIC,
        }))

        assert metric.depth_unit == "mm"
        assert metric.intensity_unit == "mm/hr"
        assert metric.total_depth_actual / INCH_TO_MM == pytest.approx(us.total_depth_actual)
        assert metric.peak_intensity / INCH_TO_MM == pytest.approx(us.peak_intensity)

    @pytest.mark.parametrize("duration", [6, 12, 24])
    def test_scs_durations(self, duration):
        request = CalculationRequest(total_depth=3.0, duration_hr=duration, time_step_min=5)
        result = calculate_hyetograph(request)
        assert result.n_intervals == duration * 12
        assert result.total_depth_actual == pytest.approx(3.0, rel=1e-6)

    @pytest.mark.parametrize("category,sub_type", [
        (StormCategory.NRCS, "Northeast Type C"),
        (StormCategory.HUFF, "Huff Type IV"),
    ])
    def test_regional_one_minute(self, category, sub_type):
        request = CalculationRequest(
            total_depth=50.0,
            depth_unit=DepthUnit.METRIC,
            category=category,
            sub_type=sub_type,
            time_step_min=1,
        )
        result = calculate_hyetograph(request)
        assert result.n_intervals == 1440
        assert result.total_depth_actual == pytest.approx(50.0, rel=1e-6)

    def test_nrcs_rejects_other_durations(self):
        request = CalculationRequest(
            total_depth=1.0,
            category=StormCategory.NRCS,
            sub_type="Northeast Type A",
            duration_hr=6,
        )
        assert calculate_hyetograph(request).is_empty
