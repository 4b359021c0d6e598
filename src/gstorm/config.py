"""Modelos Pydantic para configuración y validación de datos."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Factor de conversión pulgadas -> milímetros
INCH_TO_MM = 25.4


class StormCategory(str, Enum):
    """Familias de distribuciones temporales de tormenta."""
    SCS = "SCS"
    NRCS = "NRCS"
    HUFF = "Huff"


class DepthUnit(str, Enum):
    """Unidad de la profundidad de lluvia."""
    US = "us"          # pulgadas (unidad nativa de las tablas)
    METRIC = "metric"  # milímetros


DEPTH_UNIT_LABELS = {
    DepthUnit.US: "in",
    DepthUnit.METRIC: "mm",
}

INTENSITY_UNIT_LABELS = {
    DepthUnit.US: "in/hr",
    DepthUnit.METRIC: "mm/hr",
}


def unit_factor(unit: DepthUnit) -> float:
    """Factor lineal pulgadas -> unidad pedida."""
    return INCH_TO_MM if unit == DepthUnit.METRIC else 1.0


# ============================================================================
# Curvas de distribución
# ============================================================================

class CurveKey(BaseModel):
    """Identidad de una curva: (categoría, subtipo, duración)."""
    model_config = ConfigDict(frozen=True)

    category: StormCategory
    sub_type: str = Field(..., min_length=1)
    duration_hr: int = Field(..., gt=0)

    def __str__(self) -> str:
        return f"{self.category.value}/{self.sub_type} - {self.duration_hr}HR"


class DistributionCurve(BaseModel):
    """
    Curva de fracción acumulada de lluvia vs tiempo.

    Los tiempos están en minutos desde el inicio de la tormenta.
    """
    model_config = ConfigDict(frozen=True)

    times: tuple[float, ...]
    cumulative_fraction: tuple[float, ...]

    @field_validator("cumulative_fraction")
    @classmethod
    def validate_lengths(cls, v: tuple[float, ...], info) -> tuple[float, ...]:
        times = info.data.get("times")
        if times is not None and len(times) != len(v):
            raise ValueError("times y cumulative_fraction deben tener la misma longitud")
        if len(v) < 2:
            raise ValueError("Una curva necesita al menos 2 puntos")
        return v

    @property
    def duration_min(self) -> float:
        """Duración nominal (último tiempo de la curva)."""
        return self.times[-1]


# ============================================================================
# Cálculo de hietograma
# ============================================================================

class CalculationRequest(BaseModel):
    """Parámetros de entrada del cálculo de hietograma."""
    total_depth: float = Field(..., gt=0, description="Precipitación total")
    depth_unit: DepthUnit = Field(default=DepthUnit.US, description="Unidad de profundidad")
    duration_hr: int = Field(default=24, gt=0, description="Duración (hr)")
    time_step_min: float = Field(default=6.0, gt=0, description="Intervalo de tiempo (min)")
    category: StormCategory = Field(default=StormCategory.SCS, description="Familia de distribución")
    sub_type: str = Field(default="Type II", min_length=1, description="Subtipo de distribución")

    @property
    def curve_key(self) -> CurveKey:
        return CurveKey(
            category=self.category,
            sub_type=self.sub_type,
            duration_hr=self.duration_hr,
        )


class StormStep(BaseModel):
    """Un intervalo del hietograma."""
    time_start: float = Field(..., description="Inicio del intervalo (min)")
    time_end: float = Field(..., description="Fin del intervalo (min)")
    intensity: float = Field(..., description="Intensidad (in/hr o mm/hr)")
    depth_step: float = Field(..., description="Lámina del intervalo (in o mm)")
    cumulative_depth: float = Field(..., description="Lámina acumulada al final del intervalo")


class HyetographResult(BaseModel):
    """Resultado de hietograma."""
    labels: list[str] = Field(default_factory=list, description="Etiquetas de tiempo para gráficos")
    intensity_data: list[float] = Field(default_factory=list, description="Intensidades por intervalo")
    peak_intensity: float = Field(default=0.0, description="Intensidad pico")
    total_depth_actual: float = Field(default=0.0, description="Suma de láminas por intervalo")
    intensity_unit: str = Field(default="N/A", description="Unidad de intensidad")
    depth_unit: str = Field(default="N/A", description="Unidad de profundidad")
    detailed_data: list[StormStep] = Field(default_factory=list, description="Detalle por intervalo")
    method: Optional[str] = Field(default=None, description="Curva utilizada")

    @property
    def is_empty(self) -> bool:
        return len(self.detailed_data) == 0

    @property
    def n_intervals(self) -> int:
        return len(self.detailed_data)


# ============================================================================
# Tablas de frecuencia NOAA
# ============================================================================

class FrequencyPoint(BaseModel):
    """Profundidad para una duración dentro de un período de retorno."""
    model_config = ConfigDict(frozen=True)

    duration_label: str = Field(..., description="Etiqueta, ej. '60-min', '24-hr'")
    duration_minutes: float = Field(..., gt=0, description="Duración en minutos")
    depth: float = Field(..., ge=0, description="Profundidad (in)")


class ReturnPeriodData(BaseModel):
    """Puntos de frecuencia de un período de retorno."""
    model_config = ConfigDict(frozen=True)

    return_period: int = Field(..., ge=1, description="Período de retorno (años)")
    data_points: tuple[FrequencyPoint, ...] = Field(default_factory=tuple)


class FrequencyGrid(BaseModel):
    """Grilla período de retorno x duración de una consulta PFDS."""
    model_config = ConfigDict(frozen=True)

    return_periods: tuple[ReturnPeriodData, ...]

    @property
    def return_period_values(self) -> list[int]:
        return [rp.return_period for rp in self.return_periods]

    @property
    def duration_labels(self) -> list[str]:
        """Etiquetas de duración presentes, ordenadas por minutos."""
        seen: dict[str, float] = {}
        for rp in self.return_periods:
            for point in rp.data_points:
                seen.setdefault(point.duration_label, point.duration_minutes)
        return sorted(seen, key=lambda label: seen[label])

    def get(self, return_period: int) -> Optional[ReturnPeriodData]:
        """Busca los datos de un período de retorno."""
        for rp in self.return_periods:
            if rp.return_period == return_period:
                return rp
        return None

    def depth(self, return_period: int, duration_label: str) -> Optional[float]:
        """Profundidad para (período de retorno, duración), o None."""
        rp = self.get(return_period)
        if rp is None:
            return None
        wanted = duration_label.lower()
        for point in rp.data_points:
            if point.duration_label.lower() == wanted:
                return point.depth
        return None
