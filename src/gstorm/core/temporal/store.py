"""
Almacén inmutable de curvas de distribución.

Las curvas se construyen una sola vez desde las tablas de referencia
empaquetadas en gstorm/data y no se modifican después.
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Optional

from gstorm.config import CurveKey, DistributionCurve, StormCategory
from gstorm.core.capabilities import CATEGORY_CAPABILITIES, CategoryCapabilities

from .builder import build_category_curves


logger = logging.getLogger(__name__)

# Directorio de datos
_DATA_DIR = Path(__file__).parent.parent.parent / "data"

# Cache del almacén por defecto (se construye en el primer uso)
_store_cache: Optional["CurveStore"] = None


class CurveStore(Mapping):
    """Mapeo de solo lectura CurveKey -> DistributionCurve."""

    def __init__(self, curves: Mapping[CurveKey, DistributionCurve]):
        self._curves = MappingProxyType(dict(curves))

    def __getitem__(self, key: CurveKey) -> DistributionCurve:
        return self._curves[key]

    def __iter__(self) -> Iterator[CurveKey]:
        return iter(self._curves)

    def __len__(self) -> int:
        return len(self._curves)

    def __repr__(self) -> str:
        return f"CurveStore({len(self)} curvas)"

    def get_curve(
        self,
        category: StormCategory,
        sub_type: str,
        duration_hr: int,
    ) -> Optional[DistributionCurve]:
        """Busca una curva; None si no existe."""
        try:
            key = CurveKey(category=category, sub_type=sub_type, duration_hr=duration_hr)
        except ValueError:
            return None
        return self._curves.get(key)

    def keys_for(self, category: StormCategory) -> list[CurveKey]:
        """Claves de una categoría."""
        return [key for key in self._curves if key.category == category]

    def sub_types(self, category: StormCategory) -> list[str]:
        """Subtipos disponibles en una categoría (orden de carga)."""
        seen: list[str] = []
        for key in self.keys_for(category):
            if key.sub_type not in seen:
                seen.append(key.sub_type)
        return seen

    def durations(self, category: StormCategory, sub_type: str) -> list[int]:
        """Duraciones disponibles para (categoría, subtipo)."""
        return sorted(
            key.duration_hr
            for key in self.keys_for(category)
            if key.sub_type == sub_type
        )


def load_reference_text(filename: str, data_dir: Path | None = None) -> str:
    """Lee una tabla de referencia del directorio de datos."""
    path = (data_dir or _DATA_DIR) / filename
    return path.read_text(encoding="utf-8")


def build_curve_store(
    sources: Mapping[StormCategory, str],
    capabilities: Mapping[StormCategory, CategoryCapabilities] = CATEGORY_CAPABILITIES,
) -> CurveStore:
    """
    Construye un almacén desde el texto de cada categoría.

    Args:
        sources: Texto de la tabla de referencia por categoría
        capabilities: Reglas de cada categoría (formato, subtipos, duraciones)

    Returns:
        CurveStore inmutable
    """
    curves: dict[CurveKey, DistributionCurve] = {}
    for category, text in sources.items():
        caps = capabilities[category]
        built = build_category_curves(text, caps)
        logger.debug("%s: %d curvas construidas", caps.name, len(built))
        curves.update(built)
    return CurveStore(curves)


def load_default_store(data_dir: Path | None = None) -> CurveStore:
    """
    Carga el almacén de curvas empaquetado (con cache).

    Args:
        data_dir: Directorio alternativo de tablas (sin cache)
    """
    global _store_cache
    if data_dir is not None:
        return _load_store(data_dir)
    if _store_cache is None:
        _store_cache = _load_store(_DATA_DIR)
    return _store_cache


def _load_store(data_dir: Path) -> CurveStore:
    sources = {}
    for category, caps in CATEGORY_CAPABILITIES.items():
        path = data_dir / caps.source_file
        if not path.exists():
            logger.warning("Tabla de referencia no encontrada: %s", path)
            continue
        sources[category] = load_reference_text(caps.source_file, data_dir)
    return build_curve_store(sources)
