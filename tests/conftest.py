"""Configuración de pytest para tests de gstorm."""

import pytest

from gstorm.config import (
    CalculationRequest,
    HyetographResult,
    StormCategory,
    StormStep,
)
from gstorm.core.capabilities import CATEGORY_CAPABILITIES
from gstorm.core.temporal import build_curve_store


# Tabla multi-duración reducida: solo Type II de 6 y 24 horas.
# 24HR: láminas 0.6, 1.2, 1.8, 2.4 -> fracciones 0, 0.1, 0.3, 0.6, 1.0
# 6HR: intensidad constante -> fracciones 0, 0.25, 0.5, 0.75, 1.0
SCS_TABLE = """\
Minutes - 6HR,Type II - 6HR,Minutes - 24HR,Type II - 24HR
0:00:00,0.5,0:00,0.1
1:30:00,0.5,6:00,0.2
3:00:00,0.5,12:00,0.3
4:30:00,0.5,18:00,0.4
6:00:00,,24:00,
"""

# Tabla de duración única: una sola columna Huff
HUFF_TABLE = """\
Time,Huff Type I
0:00,1.0
12:00,1.0
24:00,
"""

NOAA_SAMPLE = """\
Point precipitation frequency estimates (inches)
NOAA Atlas 14 Volume 2 Version 3
Data type: Precipitation depth
Time series type: Partial duration
Project area: Ohio River Basin
Latitude: 39.05
Longitude: -77.12


PRECIPITATION FREQUENCY ESTIMATES
by duration for ARI (years):, 1,2,5,10,25,50,100
5-min:, 0.343,0.408,0.480,0.534,0.597,0.643,0.687
10-min:, 0.548,0.652,0.769,0.852,0.950,1.02,1.09
60-min:, 1.15,1.39,1.71,1.96,2.29,2.55,2.82
2-hr:, 1.41,1.71,2.13,2.46,2.93,3.31,3.71
24-hr:, 2.61,3.16,4.07,4.84,6.01,7.02,8.13
2-day:, 3.05,3.69,4.73,5.60,6.92,8.06,9.31


UPPER BOUND OF 90% CONFIDENCE INTERVAL
by duration for ARI (years):, 1,2,5,10,25,50,100
5-min:, 0.380,0.452,0.532,0.592,0.662,0.713,0.762
"""


@pytest.fixture
def scs_table():
    """Tabla SCS multi-duración reducida."""
    return SCS_TABLE


@pytest.fixture
def huff_table():
    """Tabla Huff de duración única reducida."""
    return HUFF_TABLE


@pytest.fixture
def noaa_sample():
    """Respuesta PFDS de ejemplo."""
    return NOAA_SAMPLE


@pytest.fixture
def small_store():
    """Almacén con (SCS, Type II, 6/24 hr) y (Huff, Huff Type I, 24 hr)."""
    return build_curve_store(
        {StormCategory.SCS: SCS_TABLE, StormCategory.HUFF: HUFF_TABLE},
        CATEGORY_CAPABILITIES,
    )


@pytest.fixture
def type_ii_request():
    """Tormenta SCS Type II de 24 hr y 1 pulgada, dt = 6 min."""
    return CalculationRequest(
        total_depth=1.0,
        duration_hr=24,
        time_step_min=6.0,
        category=StormCategory.SCS,
        sub_type="Type II",
    )


@pytest.fixture
def two_step_result():
    """Hietograma de dos intervalos de 6 minutos."""
    return HyetographResult(
        labels=["0m", "6m", "12m"],
        intensity_data=[0.5, 1.0],
        peak_intensity=1.0,
        total_depth_actual=0.15,
        intensity_unit="in/hr",
        depth_unit="in",
        detailed_data=[
            StormStep(time_start=0, time_end=6, intensity=0.5, depth_step=0.05, cumulative_depth=0.05),
            StormStep(time_start=6, time_end=12, intensity=1.0, depth_step=0.1, cumulative_depth=0.15),
        ],
        method="SCS/Type II - 24HR",
    )
