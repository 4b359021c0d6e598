"""
Módulo de distribuciones temporales de lluvia.

Construye las curvas de fracción acumulada a partir de las tablas de
referencia:
- Distribuciones SCS/TR-55 de 6, 12 y 24 horas (Tipos I, Ia, II, III)
- Distribuciones regionales NRCS de 24 horas
- Curvas Huff (1967) de 24 horas
"""

# Utilidades de curvas
from .base import (
    cumulative_fraction_from_intensities,
    normalize_curve,
    parse_time_minutes,
)

# Lectura de tablas de referencia
from .builder import (
    build_category_curves,
    build_curve,
    build_multi_duration_curves,
    build_single_duration_curves,
)

# Almacén de curvas
from .store import (
    CurveStore,
    build_curve_store,
    load_default_store,
)

__all__ = [
    # Utilidades
    "cumulative_fraction_from_intensities",
    "normalize_curve",
    "parse_time_minutes",
    # Tablas
    "build_category_curves",
    "build_curve",
    "build_multi_duration_curves",
    "build_single_duration_curves",
    # Almacén
    "CurveStore",
    "build_curve_store",
    "load_default_store",
]
