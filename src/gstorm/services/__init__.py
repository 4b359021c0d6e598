"""Servicios externos (NOAA PFDS)."""

from gstorm.services.noaa import (
    NOAA_PFDS_URL,
    NoaaServiceError,
    fetch_frequency_grid,
    fetch_pfds_csv,
    validate_coordinates,
)

__all__ = [
    "NOAA_PFDS_URL",
    "NoaaServiceError",
    "fetch_frequency_grid",
    "fetch_pfds_csv",
    "validate_coordinates",
]
