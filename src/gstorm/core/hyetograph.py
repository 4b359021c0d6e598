"""
Cálculo de hietogramas desde curvas de distribución tabuladas.

Cada combinación (categoría, subtipo, duración) tiene su propia curva;
no se reescala el tiempo de una curva de 24 horas para otras duraciones.
"""

import logging
import math
from typing import Optional

import numpy as np

from gstorm.config import (
    DEPTH_UNIT_LABELS,
    INTENSITY_UNIT_LABELS,
    CalculationRequest,
    DepthUnit,
    HyetographResult,
    StormStep,
    unit_factor,
)
from gstorm.core.capabilities import get_capabilities
from gstorm.core.interpolation import interpolate
from gstorm.core.temporal.store import CurveStore, load_default_store


logger = logging.getLogger(__name__)

# Diferencia relativa tolerada entre lámina pedida y calculada
DEPTH_CHECK_TOL = 0.01


def empty_hyetograph() -> HyetographResult:
    """Resultado vacío: sin intervalos, pico y lámina nulos."""
    return HyetographResult()


def format_time_label(time_min: float, total_duration_min: float) -> str:
    """
    Formatea un tiempo para ejes y tablas.

    Tormentas de más de 2 horas usan H:MM; las más cortas, minutos.
    """
    if total_duration_min > 120:
        hours = int(time_min // 60)
        minutes = int(round(time_min % 60))
        if minutes == 60:
            hours, minutes = hours + 1, 0
        return f"{hours}:{minutes:02d}"
    return f"{int(round(time_min))}m"


def time_boundaries(total_duration_min: float, time_step_min: float) -> list[float]:
    """
    Límites de los intervalos: 0, dt, 2dt, ... hasta la duración total.

    El último límite es exactamente la duración aunque no sea múltiplo
    de dt (el último intervalo queda más corto).
    """
    n_steps = math.ceil(total_duration_min / time_step_min)
    boundaries = [min(i * time_step_min, total_duration_min) for i in range(n_steps + 1)]
    if boundaries[-1] < total_duration_min:
        boundaries.append(float(total_duration_min))
    if len(boundaries) > 1 and boundaries[-1] == boundaries[-2]:
        boundaries.pop()
    return boundaries


def _invalid_reason(request: CalculationRequest) -> Optional[str]:
    """Motivo por el que la solicitud no es calculable, o None."""
    try:
        caps = get_capabilities(request.category)
    except ValueError as e:
        return str(e)

    try:
        DepthUnit(request.depth_unit)
    except ValueError:
        return f"unidad de profundidad desconocida ({request.depth_unit!r})"
    if not (request.total_depth > 0) or not math.isfinite(request.total_depth):
        return f"profundidad total inválida ({request.total_depth})"
    if not (request.time_step_min > 0) or not math.isfinite(request.time_step_min):
        return f"intervalo de tiempo inválido ({request.time_step_min})"
    if not caps.allows_time_step(request.time_step_min):
        return (
            f"intervalo de {request.time_step_min} min no permitido para {caps.name} "
            f"({caps.time_step_rule})"
        )
    if not caps.allows_duration(request.duration_hr):
        return f"duración de {request.duration_hr} hr no permitida para {caps.name}"
    if not caps.allows_sub_type(request.sub_type):
        return f"subtipo '{request.sub_type}' no pertenece a {caps.name}"
    return None


def calculate_hyetograph(
    request: CalculationRequest,
    store: Optional[CurveStore] = None,
) -> HyetographResult:
    """
    Genera el hietograma de una tormenta de diseño.

    Las fracciones acumuladas de la curva se interpolan en los límites de
    cada intervalo y se multiplican por la lámina total (en pulgadas). La
    intensidad de cada intervalo es su lámina dividida por su duración.

    Si la curva no existe o los datos de entrada no son válidos, devuelve
    un resultado vacío en lugar de lanzar una excepción.

    Args:
        request: Parámetros de la tormenta
        store: Almacén de curvas (default: tablas empaquetadas)

    Returns:
        HyetographResult en la unidad pedida
    """
    if store is None:
        store = load_default_store()

    category = getattr(request.category, "value", request.category)
    label = f"{category}/{request.sub_type} - {request.duration_hr}HR"

    curve = store.get_curve(request.category, request.sub_type, request.duration_hr)
    if curve is None:
        logger.error("Distribución no encontrada: %s", label)
        return empty_hyetograph()

    reason = _invalid_reason(request)
    if reason is not None:
        logger.warning("Cálculo omitido para %s: %s", label, reason)
        return empty_hyetograph()

    unit = DepthUnit(request.depth_unit)
    factor = unit_factor(unit)
    total_depth_in = request.total_depth / factor
    total_duration_min = request.duration_hr * 60.0

    boundaries = np.array(time_boundaries(total_duration_min, request.time_step_min))
    fractions = np.array([
        interpolate(t, curve.times, curve.cumulative_fraction) for t in boundaries
    ])
    cumulative_in = fractions * total_depth_in
    cumulative_in[0] = 0.0

    steps: list[StormStep] = []
    labels: list[str] = []
    intensities: list[float] = []
    total_in = 0.0

    for i in range(1, len(boundaries)):
        start, end = float(boundaries[i - 1]), float(boundaries[i])
        step_min = end - start
        if step_min <= 0:
            continue

        depth_in = float(cumulative_in[i] - cumulative_in[i - 1])
        intensity_in_hr = depth_in / (step_min / 60.0)
        total_in += depth_in

        intensity = intensity_in_hr * factor
        intensities.append(intensity)
        labels.append(format_time_label(start, total_duration_min))
        steps.append(StormStep(
            time_start=start,
            time_end=end,
            intensity=intensity,
            depth_step=depth_in * factor,
            cumulative_depth=float(cumulative_in[i]) * factor,
        ))

    labels.append(format_time_label(total_duration_min, total_duration_min))

    if abs(total_in - total_depth_in) > DEPTH_CHECK_TOL * total_depth_in:
        logger.warning(
            "%s: lámina calculada %.4f in difiere de la pedida %.4f in",
            label, total_in, total_depth_in,
        )

    return HyetographResult(
        labels=labels,
        intensity_data=intensities,
        peak_intensity=max(intensities, default=0.0),
        total_depth_actual=total_in * factor,
        intensity_unit=INTENSITY_UNIT_LABELS[unit],
        depth_unit=DEPTH_UNIT_LABELS[unit],
        detailed_data=steps,
        method=label,
    )
