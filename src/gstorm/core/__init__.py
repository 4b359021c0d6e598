"""Módulos de cálculo de tormentas de diseño."""

from gstorm.core.capabilities import (
    CATEGORY_CAPABILITIES,
    CategoryCapabilities,
    get_capabilities,
    list_storm_types,
)

from gstorm.core.interpolation import interpolate

from gstorm.core.temporal import (
    CurveStore,
    build_curve_store,
    build_multi_duration_curves,
    build_single_duration_curves,
    load_default_store,
    normalize_curve,
)

from gstorm.core.hyetograph import (
    calculate_hyetograph,
    empty_hyetograph,
    format_time_label,
    time_boundaries,
)

from gstorm.core.frequency import (
    design_depth,
    duration_label_minutes,
    parse_frequency_table,
)

__all__ = [
    # Capacidades por categoría
    "CATEGORY_CAPABILITIES",
    "CategoryCapabilities",
    "get_capabilities",
    "list_storm_types",
    # Interpolación
    "interpolate",
    # Curvas de distribución
    "CurveStore",
    "build_curve_store",
    "build_multi_duration_curves",
    "build_single_duration_curves",
    "load_default_store",
    "normalize_curve",
    # Hietograma
    "calculate_hyetograph",
    "empty_hyetograph",
    "format_time_label",
    "time_boundaries",
    # Frecuencias NOAA
    "design_depth",
    "duration_label_minutes",
    "parse_frequency_table",
]
