"""
Validadores centralizados para entradas CLI.

Proporciona funciones de validación con mensajes de error consistentes.
Las reglas de subtipos, duraciones e intervalos salen de la tabla de
capacidades de cada categoría.
"""

import math

import typer

from gstorm.cli.theme import print_error
from gstorm.config import FrequencyGrid, StormCategory
from gstorm.core.capabilities import CategoryCapabilities, get_capabilities
from gstorm.services.noaa import NoaaServiceError, validate_coordinates as _check_coordinates


def _fail(message: str, exit_on_error: bool) -> bool:
    print_error(message)
    if exit_on_error:
        raise typer.Exit(1)
    return False


# =============================================================================
# VALIDADORES DE TORMENTA
# =============================================================================

def validate_depth(value: float, exit_on_error: bool = True) -> bool:
    """
    Valida que la precipitación total sea positiva y finita.

    Args:
        value: Profundidad total
        exit_on_error: Si True, termina el programa con error

    Returns:
        True si es válido, False si no
    """
    if not math.isfinite(value) or value <= 0:
        return _fail(f"La precipitación total debe ser positiva (recibido: {value})", exit_on_error)
    return True


def validate_storm_type(
    category: StormCategory,
    sub_type: str,
    exit_on_error: bool = True,
) -> bool:
    """Valida que el subtipo pertenezca a la categoría."""
    caps = get_capabilities(category)
    if not caps.allows_sub_type(sub_type):
        return _fail(
            f"Subtipo '{sub_type}' no válido para {caps.name}. "
            f"Opciones: {', '.join(caps.sub_types)}",
            exit_on_error,
        )
    return True


def validate_duration(
    category: StormCategory,
    duration_hr: int,
    exit_on_error: bool = True,
) -> bool:
    """Valida la duración contra las duraciones tabuladas de la categoría."""
    caps = get_capabilities(category)
    if not caps.allows_duration(duration_hr):
        allowed = ", ".join(str(d) for d in caps.durations_hr)
        return _fail(
            f"Duración de {duration_hr} hr no disponible para {caps.name} (válidas: {allowed})",
            exit_on_error,
        )
    return True


def validate_time_step(
    category: StormCategory,
    time_step_min: float,
    exit_on_error: bool = True,
) -> bool:
    """Valida el intervalo de tiempo según la regla de la categoría."""
    caps = get_capabilities(category)
    if not caps.allows_time_step(time_step_min):
        return _fail(
            f"Intervalo de {time_step_min:g} min no válido para {caps.name} "
            f"({caps.time_step_rule})",
            exit_on_error,
        )
    return True


def validate_storm_request(
    category: StormCategory,
    sub_type: str,
    duration_hr: int,
    time_step_min: float,
    depth: float,
) -> CategoryCapabilities:
    """Ejecuta todas las validaciones de tormenta; termina en el primer error."""
    validate_depth(depth)
    validate_storm_type(category, sub_type)
    validate_duration(category, duration_hr)
    validate_time_step(category, time_step_min)
    return get_capabilities(category)


# =============================================================================
# VALIDADORES DE FRECUENCIA
# =============================================================================

def validate_return_period(grid: FrequencyGrid, return_period: int, exit_on_error: bool = True) -> bool:
    """Valida que la grilla NOAA tenga el período de retorno pedido."""
    if grid.get(return_period) is None:
        available = ", ".join(str(rp) for rp in grid.return_period_values)
        return _fail(
            f"Período de retorno de {return_period} años no disponible (grilla: {available})",
            exit_on_error,
        )
    return True


def validate_grid_duration(grid: FrequencyGrid, duration_hr: int, exit_on_error: bool = True) -> bool:
    """Valida que la grilla NOAA tenga la fila '<duración>-hr'."""
    label = f"{duration_hr}-hr"
    if label.lower() not in (d.lower() for d in grid.duration_labels):
        return _fail(f"La grilla NOAA no tiene la duración {label}", exit_on_error)
    return True


# =============================================================================
# VALIDADORES GEOGRÁFICOS
# =============================================================================

def validate_coordinates(latitude: float, longitude: float, exit_on_error: bool = True) -> bool:
    """Valida latitud [-90, 90] y longitud [-180, 180]."""
    try:
        _check_coordinates(latitude, longitude)
    except NoaaServiceError as e:
        return _fail(e.message, exit_on_error)
    return True
