"""
Tabla declarativa de capacidades por categoría de tormenta.

Cada familia de distribuciones define qué subtipos, duraciones e
intervalos de tiempo son válidos. La validación del cálculo y la CLI
consultan esta misma tabla.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from gstorm.config import StormCategory


# Formatos de tabla de referencia
LAYOUT_MULTI_DURATION = "multi_duration"
LAYOUT_SINGLE_DURATION = "single_duration"


@dataclass(frozen=True)
class CategoryCapabilities:
    """Reglas de una categoría de distribución."""
    category: StormCategory
    name: str
    sub_types: tuple[str, ...]
    durations_hr: tuple[int, ...]
    time_steps_min: Optional[tuple[int, ...]]   # None = cualquier entero positivo
    source_file: str
    layout: str
    reference: str = ""

    def allows_sub_type(self, sub_type: str) -> bool:
        return sub_type in self.sub_types

    def allows_duration(self, duration_hr: float) -> bool:
        return duration_hr in self.durations_hr

    def allows_time_step(self, time_step_min: float) -> bool:
        """Valida el intervalo de tiempo según la regla de la categoría."""
        if time_step_min is None or time_step_min <= 0:
            return False
        if self.time_steps_min is None:
            return float(time_step_min).is_integer()
        return time_step_min in self.time_steps_min

    @property
    def time_step_rule(self) -> str:
        """Descripción legible de los intervalos permitidos."""
        if self.time_steps_min is None:
            return "entero positivo"
        return " o ".join(str(dt) for dt in self.time_steps_min)


CATEGORY_CAPABILITIES: Mapping[StormCategory, CategoryCapabilities] = MappingProxyType({
    StormCategory.SCS: CategoryCapabilities(
        category=StormCategory.SCS,
        name="SCS (TR-55)",
        sub_types=("Type I", "Type Ia", "Type II", "Type III"),
        durations_hr=(6, 12, 24),
        time_steps_min=None,
        source_file="scs_design_storms.csv",
        layout=LAYOUT_MULTI_DURATION,
        reference="USDA-NRCS TR-55, 1986",
    ),
    StormCategory.NRCS: CategoryCapabilities(
        category=StormCategory.NRCS,
        name="NRCS (Regional)",
        sub_types=(
            "Northeast Type A",
            "Northeast Type B",
            "Northeast Type C",
            "Northeast Type D",
        ),
        durations_hr=(24,),
        time_steps_min=(1, 6),
        source_file="nrcs_regional_storms.csv",
        layout=LAYOUT_SINGLE_DURATION,
        reference="NRCS, distribuciones regionales NOAA Atlas 14",
    ),
    StormCategory.HUFF: CategoryCapabilities(
        category=StormCategory.HUFF,
        name="Huff (Regional)",
        sub_types=("Huff Type I", "Huff Type II", "Huff Type III", "Huff Type IV"),
        durations_hr=(24,),
        time_steps_min=(1, 6),
        source_file="huff_storms.csv",
        layout=LAYOUT_SINGLE_DURATION,
        reference="Huff (1967), curvas de cuartil al 50%",
    ),
})


def get_capabilities(category: StormCategory | str) -> CategoryCapabilities:
    """
    Obtiene las capacidades de una categoría.

    Raises:
        ValueError: Si la categoría no existe
    """
    try:
        return CATEGORY_CAPABILITIES[StormCategory(category)]
    except ValueError:
        raise ValueError(f"Categoría de tormenta desconocida: {category}") from None


def list_storm_types() -> list[tuple[StormCategory, str]]:
    """Lista de combinaciones (categoría, subtipo) válidas."""
    return [
        (caps.category, sub_type)
        for caps in CATEGORY_CAPABILITIES.values()
        for sub_type in caps.sub_types
    ]
