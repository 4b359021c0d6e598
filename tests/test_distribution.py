"""Tests para core/temporal - construcción de curvas de distribución."""

import pytest

from gstorm.config import CurveKey, StormCategory
from gstorm.core.capabilities import CATEGORY_CAPABILITIES, LAYOUT_SINGLE_DURATION
from gstorm.core.temporal import (
    build_multi_duration_curves,
    build_single_duration_curves,
    cumulative_fraction_from_intensities,
    normalize_curve,
    parse_time_minutes,
)
from gstorm.core.temporal.builder import build_category_curves, extract_series


class TestParseTime:
    """Tests para lectura de tiempos H:MM y H:MM:SS."""

    def test_hours_minutes(self):
        assert parse_time_minutes("1:30") == 90.0

    def test_with_seconds(self):
        assert parse_time_minutes("0:07:30") == pytest.approx(7.5)

    def test_day_end(self):
        assert parse_time_minutes("24:00") == 1440.0

    @pytest.mark.parametrize("value", ["abc", "1", "", "1:xx", "-1:00"])
    def test_invalid(self, value):
        assert parse_time_minutes(value) is None


class TestCumulativeFraction:
    """Tests de integración de intensidades."""

    def test_interval_start_rule(self):
        """La lámina de cada intervalo usa la intensidad del inicio."""
        times, fractions = cumulative_fraction_from_intensities(
            [0, 60, 120], [1.0, 3.0, 100.0]
        )
        assert times == [0.0, 60.0, 120.0]
        assert fractions == pytest.approx([0.0, 0.25, 1.0])

    def test_zero_total_gives_zero_fractions(self):
        _, fractions = cumulative_fraction_from_intensities([0, 60, 120], [0, 0, 0])
        assert fractions == [0.0, 0.0, 0.0]

    def test_empty(self):
        assert cumulative_fraction_from_intensities([], []) == ([], [])


class TestNormalizeCurve:
    """Tests de las invariantes de inicio, fin y monotonía."""

    def test_inserts_origin(self):
        curve = normalize_curve([10, 20], [0.5, 1.0], 20)
        assert curve.times == (0.0, 10.0, 20.0)
        assert curve.cumulative_fraction == (0.0, 0.5, 1.0)

    def test_corrects_nonzero_origin_and_trims_tail(self):
        curve = normalize_curve([0, 30, 60, 90], [0.2, 0.5, 0.9, 1.0], 60)
        assert curve.times == (0.0, 30.0, 60.0)
        assert curve.cumulative_fraction == (0.0, 0.5, 1.0)

    def test_appends_final_point(self):
        curve = normalize_curve([0, 30], [0.0, 0.5], 60)
        assert curve.times[-1] == 60.0
        assert curve.cumulative_fraction[-1] == 1.0

    def test_drops_decreasing_fraction(self):
        curve = normalize_curve([0, 10, 20, 30], [0.0, 0.5, 0.4, 1.0], 30)
        assert curve.times == (0.0, 10.0, 30.0)
        assert curve.cumulative_fraction == (0.0, 0.5, 1.0)

    def test_duplicate_time_keeps_larger_fraction(self):
        curve = normalize_curve([0, 10, 10, 30], [0.0, 0.3, 0.5, 1.0], 30)
        assert curve.times == (0.0, 10.0, 30.0)
        assert curve.cumulative_fraction == (0.0, 0.5, 1.0)

    def test_degenerate_curve_still_ends_at_one(self):
        curve = normalize_curve([0, 60, 120], [0.0, 0.0, 0.0], 120)
        assert curve.cumulative_fraction == (0.0, 0.0, 1.0)

    def test_fractions_clipped(self):
        curve = normalize_curve([0, 10, 20], [0.0, 1.4, 1.0], 20)
        assert max(curve.cumulative_fraction) == 1.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            normalize_curve([0, 10], [0.0], 10)


class TestExtractSeries:
    """Tests de lectura de pares tiempo/intensidad."""

    def test_skips_bad_rows(self):
        rows = [
            ["0:00", "1"],
            ["bad", "2"],
            ["1:00", "2"],
            ["0:30", "9"],   # decreciente
            ["", "5"],       # sin tiempo
            ["2:00", ""],    # intensidad vacía
        ]
        times, intensities = extract_series(rows, 0, 1)
        assert times == [0.0, 60.0, 120.0]
        assert intensities == [1.0, 2.0, 0.0]

    def test_non_numeric_intensity_is_zero(self):
        times, intensities = extract_series([["0:00", "n/a"], ["1:00", "2"]], 0, 1)
        assert intensities == [0.0, 2.0]


class TestBuildCurves:
    """Tests de construcción desde tablas de referencia."""

    def test_multi_duration_discovers_columns(self, scs_table):
        curves = build_multi_duration_curves(scs_table, StormCategory.SCS)

        key_24 = CurveKey(category=StormCategory.SCS, sub_type="Type II", duration_hr=24)
        key_6 = CurveKey(category=StormCategory.SCS, sub_type="Type II", duration_hr=6)
        assert set(curves) == {key_24, key_6}

        assert curves[key_24].times == (0.0, 360.0, 720.0, 1080.0, 1440.0)
        assert curves[key_24].cumulative_fraction == pytest.approx((0.0, 0.1, 0.3, 0.6, 1.0))
        assert curves[key_6].cumulative_fraction == pytest.approx((0.0, 0.25, 0.5, 0.75, 1.0))

    def test_multi_duration_missing_time_column(self, scs_table):
        """Una duración sin columna de tiempo queda ausente."""
        curves = build_multi_duration_curves(
            scs_table, StormCategory.SCS, sub_types=["Type II"], durations_hr=[12, 24]
        )
        assert [key.duration_hr for key in curves] == [24]

    def test_multi_duration_missing_sub_type(self, scs_table):
        curves = build_multi_duration_curves(
            scs_table, StormCategory.SCS, sub_types=["Type III"], durations_hr=[24]
        )
        assert curves == {}

    def test_single_duration(self, huff_table):
        curves = build_single_duration_curves(huff_table, StormCategory.HUFF, 24)
        key = CurveKey(category=StormCategory.HUFF, sub_type="Huff Type I", duration_hr=24)
        assert curves[key].cumulative_fraction == pytest.approx((0.0, 0.5, 1.0))

    def test_empty_table(self):
        assert build_multi_duration_curves("", StormCategory.SCS) == {}
        assert build_single_duration_curves("", StormCategory.HUFF, 24) == {}

    def test_carriage_return_line_endings(self):
        text = "Time,Huff Type I\r0:00,1\r24:00,\r"
        curves = build_single_duration_curves(text, StormCategory.HUFF, 24)
        key = CurveKey(category=StormCategory.HUFF, sub_type="Huff Type I", duration_hr=24)
        assert curves[key].cumulative_fraction == pytest.approx((0.0, 1.0))

    def test_unreadable_table(self):
        text = 'Time,Huff Type I\n0:00,"' + "1" * 200000 + '"\n24:00,\n'
        assert build_single_duration_curves(text, StormCategory.HUFF, 24) == {}
        assert build_multi_duration_curves(text, StormCategory.SCS) == {}

    def test_header_only_column_omitted(self):
        text = "Time,Huff Type I\n"
        assert build_single_duration_curves(text, StormCategory.HUFF, 24) == {}

    def test_dispatch_by_layout(self, huff_table):
        curves = build_category_curves(huff_table, CATEGORY_CAPABILITIES[StormCategory.HUFF])
        assert len(curves) == 1

    def test_single_layout_requires_one_duration(self, huff_table):
        from dataclasses import replace

        caps = replace(
            CATEGORY_CAPABILITIES[StormCategory.HUFF],
            durations_hr=(12, 24),
            layout=LAYOUT_SINGLE_DURATION,
        )
        with pytest.raises(ValueError):
            build_category_curves(huff_table, caps)

    def test_unknown_layout(self, huff_table):
        from dataclasses import replace

        caps = replace(CATEGORY_CAPABILITIES[StormCategory.HUFF], layout="xml")
        with pytest.raises(ValueError):
            build_category_curves(huff_table, caps)
