"""Exportación de hietogramas y tablas de frecuencia."""

from gstorm.reports.generator import (
    export_to_csv,
    frequency_grid_to_csv,
    hyetograph_to_csv,
    hyetograph_to_json,
    hyetograph_to_swmm_dat,
    write_swmm_dat,
)

__all__ = [
    "export_to_csv",
    "frequency_grid_to_csv",
    "hyetograph_to_csv",
    "hyetograph_to_json",
    "hyetograph_to_swmm_dat",
    "write_swmm_dat",
]
