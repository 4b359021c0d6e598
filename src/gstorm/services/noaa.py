"""
Consulta de estimaciones de precipitación-frecuencia NOAA (PFDS).

Reenvía (latitud, longitud) al servidor HDSC de NOAA y devuelve el CSV
sin modificar. Los fallos se traducen a un código de estado HTTP y un
mensaje, como lo haría un proxy: 400 coordenadas inválidas, 404 sin datos
para el punto, 502/503/504 fallos del servidor remoto.
"""

import logging
from typing import Optional

import requests

from gstorm import __version__
from gstorm.config import FrequencyGrid
from gstorm.core.frequency import parse_frequency_table


logger = logging.getLogger(__name__)

NOAA_PFDS_URL = "https://hdsc.nws.noaa.gov/cgi-bin/hdsc/new/fe_text_mean.csv"
DEFAULT_TIMEOUT_S = 15
USER_AGENT = f"GStorm/{__version__} (python-requests)"


class NoaaServiceError(Exception):
    """Fallo al consultar NOAA, con el código HTTP equivalente."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"NoaaServiceError({self.status_code}, {self.message!r})"


def validate_coordinates(latitude, longitude) -> tuple[float, float]:
    """
    Valida y convierte coordenadas geográficas.

    Raises:
        NoaaServiceError: 400 si no son numéricas o están fuera de rango
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise NoaaServiceError(400, "Latitud y longitud deben ser numéricas.") from None

    if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
        raise NoaaServiceError(400, "Valores de latitud o longitud inválidos.")
    return lat, lon


def fetch_pfds_csv(
    latitude,
    longitude,
    url: str = NOAA_PFDS_URL,
    timeout: float = DEFAULT_TIMEOUT_S,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Descarga la tabla de profundidades PFDS (serie de duración parcial, pulgadas).

    Args:
        latitude: Latitud en grados decimales
        longitude: Longitud en grados decimales
        url: Endpoint CSV de NOAA HDSC
        timeout: Tiempo máximo de espera (s)
        session: Sesión requests opcional (reutilización de conexiones, tests)

    Returns:
        Cuerpo CSV sin modificar

    Raises:
        NoaaServiceError: Si la consulta falla
    """
    lat, lon = validate_coordinates(latitude, longitude)
    params = {
        "lat": lat,
        "lon": lon,
        "data": "depth",
        "units": "english",
        "series": "pds",
    }
    http = session if session is not None else requests

    logger.info("Consultando NOAA PFDS: lat=%s lon=%s", lat, lon)
    try:
        response = http.get(
            url,
            params=params,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
    except requests.Timeout:
        raise NoaaServiceError(504, "La consulta a NOAA excedió el tiempo de espera.") from None
    except requests.ConnectionError:
        raise NoaaServiceError(
            503, "No se pudo conectar con el servidor de NOAA. Intente más tarde."
        ) from None
    except requests.RequestException as e:
        logger.error("Error consultando NOAA: %s", e)
        raise NoaaServiceError(500, "Error al obtener datos de NOAA.") from e

    if response.status_code != 200:
        logger.error("NOAA respondió con estado %s", response.status_code)
        raise NoaaServiceError(
            response.status_code,
            f"El servidor de NOAA respondió con estado {response.status_code}.",
        )

    body = response.text or ""
    if "no data available" in body.lower():
        logger.warning("NOAA sin datos para lat=%s lon=%s", lat, lon)
        raise NoaaServiceError(404, "NOAA no tiene datos para la ubicación seleccionada.")
    if not body.strip() or "Error" in body or "An error occurred" in body:
        logger.warning("NOAA devolvió un error o una respuesta vacía")
        raise NoaaServiceError(502, "Respuesta de error o vacía del servidor de NOAA.")

    return body


def fetch_frequency_grid(
    latitude,
    longitude,
    **kwargs,
) -> Optional[FrequencyGrid]:
    """
    Descarga y lee la tabla PFDS de un punto.

    Returns:
        FrequencyGrid, o None si la respuesta no contiene una tabla legible
    """
    return parse_frequency_table(fetch_pfds_csv(latitude, longitude, **kwargs))
