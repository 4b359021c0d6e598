"""
Gráficos en terminal con plotext.
"""

import plotext as plt

from gstorm.cli.theme import get_palette
from gstorm.config import HyetographResult


def _round_ticks(max_val: float, num_ticks: int = 5) -> list[float]:
    """
    Genera ticks redondeados para un eje.

    Args:
        max_val: Valor máximo del eje
        num_ticks: Número aproximado de ticks deseados

    Returns:
        Lista de valores de ticks redondeados
    """
    if max_val <= 0:
        return [0]

    # Calcular intervalo "bonito"
    raw_interval = max_val / num_ticks
    magnitude = 10 ** int(f"{raw_interval:.0e}".split("e")[1])
    normalized = raw_interval / magnitude

    if normalized <= 1:
        nice_interval = 1 * magnitude
    elif normalized <= 2:
        nice_interval = 2 * magnitude
    elif normalized <= 5:
        nice_interval = 5 * magnitude
    else:
        nice_interval = 10 * magnitude

    ticks = []
    tick = 0
    while tick <= max_val * 1.1:
        ticks.append(tick)
        tick += nice_interval

    return ticks


def build_hyetograph_plot(
    result: HyetographResult,
    width: int = 70,
    height: int = 18,
    max_xticks: int = 9,
) -> str:
    """
    Construye el gráfico de barras del hietograma.

    Args:
        result: Hietograma calculado
        width: Ancho del gráfico (caracteres)
        height: Alto del gráfico (líneas)
        max_xticks: Máximo de etiquetas de tiempo en el eje X

    Returns:
        String con el gráfico renderizado (vacío si no hay intervalos)
    """
    if result.is_empty:
        return ""

    palette = get_palette()

    plt.clear_figure()
    plt.theme(palette.plot_theme)
    plt.plot_size(width, height)

    x = list(range(len(result.intensity_data)))
    plt.bar(x, result.intensity_data, width=1.0)

    # Etiquetas de tiempo espaciadas
    every = max(1, len(x) // max(1, max_xticks - 1))
    tick_pos = x[::every]
    plt.xticks(tick_pos, [result.labels[i] for i in tick_pos])

    ticks = _round_ticks(result.peak_intensity)
    plt.yticks(ticks, [f"{t:g}" for t in ticks])

    plt.title(result.method or "Hietograma")
    plt.xlabel("Tiempo")
    plt.ylabel(f"i ({result.intensity_unit})")

    return plt.build()
