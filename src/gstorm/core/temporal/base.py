"""
Utilidades base para distribuciones temporales de lluvia.

Incluye:
- Lectura de tiempos H:MM / H:MM:SS
- Conversión de intensidades tabuladas a fracción acumulada
- Normalización de curvas (bordes y monotonía)
"""

import logging
from typing import Optional

import numpy as np

from gstorm.config import DistributionCurve


logger = logging.getLogger(__name__)

# Tolerancias para comparar tiempos (min) y fracciones
TIME_TOL = 0.1
FRACTION_TOL = 1e-3
ZERO_DEPTH_TOL = 1e-12


def parse_time_minutes(value: str) -> Optional[float]:
    """
    Convierte un tiempo 'H:MM' o 'H:MM:SS' a minutos.

    Returns:
        Minutos desde el inicio, o None si el formato es inválido
    """
    if value is None:
        return None
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) == 3 else 0
    except ValueError:
        return None
    if hours < 0 or minutes < 0 or seconds < 0:
        return None
    return hours * 60 + minutes + seconds / 60.0


def parse_intensity(value: Optional[str]) -> float:
    """Lee una intensidad; celdas vacías o no numéricas valen 0."""
    if value is None:
        return 0.0
    try:
        intensity = float(value.strip())
    except ValueError:
        return 0.0
    if not np.isfinite(intensity):
        return 0.0
    return intensity


def cumulative_fraction_from_intensities(
    times_min: list[float],
    intensities: list[float],
    label: str = "",
) -> tuple[list[float], list[float]]:
    """
    Integra intensidades tabuladas y normaliza a fracción acumulada.

    La lámina de cada intervalo es la intensidad al inicio del intervalo
    por su duración en horas.

    Args:
        times_min: Tiempos no decrecientes (min)
        intensities: Intensidad en cada tiempo (in/hr)
        label: Nombre de la curva para los mensajes de log

    Returns:
        Tupla (tiempos, fracción acumulada)
    """
    if not times_min:
        return [], []

    times = np.asarray(times_min, dtype=float)
    rates = np.asarray(intensities, dtype=float)

    dt_hr = np.diff(times) / 60.0
    increments = rates[:-1] * dt_hr
    cumulative = np.concatenate(([0.0], np.cumsum(increments)))

    total = float(cumulative[-1])
    logger.debug("Lámina total tabulada para %s: %.4f in", label, total)

    if abs(total) <= ZERO_DEPTH_TOL:
        logger.warning("Lámina total nula para %s: fracciones en 0", label)
        fractions = np.zeros_like(cumulative)
    else:
        fractions = cumulative / total

    return times.tolist(), fractions.tolist()


def normalize_curve(
    times_min: list[float],
    fractions: list[float],
    duration_min: float,
    label: str = "",
) -> DistributionCurve:
    """
    Fuerza las invariantes de una curva de distribución.

    1. Primer punto (0, 0): se inserta o se corrige.
    2. Se recortan los puntos posteriores a la duración nominal y el
       último punto queda exactamente en (duración, 1.0).
    3. Se descartan puntos que no avanzan en tiempo o que retroceden en
       fracción (tiempos repetidos conservan la mayor fracción).

    Args:
        times_min: Tiempos (min)
        fractions: Fracción acumulada en cada tiempo
        duration_min: Duración nominal de la curva (min)
        label: Nombre de la curva para los mensajes de log

    Returns:
        DistributionCurve inmutable
    """
    if len(times_min) != len(fractions):
        raise ValueError("times_min y fractions deben tener la misma longitud")

    times = [float(t) for t in times_min]
    values = [min(max(float(f), 0.0), 1.0) for f in fractions]

    # Inicio en (0, 0)
    if not times or times[0] > 0:
        logger.warning("%s: se inserta el punto inicial (0, 0)", label)
        times.insert(0, 0.0)
        values.insert(0, 0.0)
    elif values[0] != 0.0:
        logger.warning("%s: fracción inicial %.4f corregida a 0", label, values[0])
        values[0] = 0.0

    # Fin en (duración, 1.0)
    while times and times[-1] > duration_min + TIME_TOL:
        logger.warning(
            "%s: se descarta t=%.2f min posterior a la duración (%.0f min)",
            label, times[-1], duration_min,
        )
        times.pop()
        values.pop()

    if abs(times[-1] - duration_min) <= TIME_TOL and len(times) > 1:
        if abs(values[-1] - 1.0) > FRACTION_TOL:
            logger.warning("%s: fracción final %.4f ajustada a 1.0", label, values[-1])
        times[-1] = float(duration_min)
        values[-1] = 1.0
    else:
        logger.warning("%s: se agrega el punto final (%.0f, 1.0)", label, duration_min)
        times.append(float(duration_min))
        values.append(1.0)

    kept_times, kept_values = _enforce_monotonic(times, values, label)
    return DistributionCurve(
        times=tuple(kept_times),
        cumulative_fraction=tuple(kept_values),
    )


def _enforce_monotonic(
    times: list[float],
    values: list[float],
    label: str,
) -> tuple[list[float], list[float]]:
    """Pasada final de monotonía estricta en tiempo y no decreciente en fracción."""
    kept_times = [times[0]]
    kept_values = [values[0]]

    for t, f in zip(times[1:], values[1:]):
        if t <= kept_times[-1]:
            # Tiempo repetido: se queda con la mayor fracción
            if f > kept_values[-1] and len(kept_times) > 1:
                logger.warning("%s: t=%.2f duplicado, se conserva fracción %.4f", label, t, f)
                kept_values[-1] = f
            else:
                logger.warning("%s: se descarta t=%.2f (no creciente)", label, t)
            continue
        if f < kept_values[-1]:
            logger.warning("%s: se descarta t=%.2f (fracción %.4f decreciente)", label, t, f)
            continue
        kept_times.append(t)
        kept_values.append(f)

    # El último punto forzado nunca se descarta
    if kept_times[-1] < times[-1]:
        kept_times.append(times[-1])
        kept_values.append(values[-1])
    else:
        kept_times[-1] = times[-1]
        kept_values[-1] = values[-1]

    return kept_times, kept_values
