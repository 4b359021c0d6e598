"""
Interpolación lineal por tramos sobre tablas ordenadas.
"""

from collections.abc import Sequence

import numpy as np


# Tolerancia para considerar que x coincide con un punto de la tabla
_EXACT_TOL = 1e-9


def interpolate(x: float, xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Interpola linealmente y(x) sobre una tabla (xs, ys).

    Fuera del rango de la tabla el valor se recorta al primer/último y.
    Si x coincide con un punto de la tabla se devuelve su y sin interpolar,
    lo que evita dividir por cero cuando hay x repetidos.

    Args:
        x: Abscisa a evaluar
        xs: Abscisas no decrecientes
        ys: Ordenadas (misma longitud que xs)

    Returns:
        Valor interpolado

    Raises:
        ValueError: Si las tablas están vacías o tienen distinta longitud
    """
    xs_arr = np.asarray(xs, dtype=float)
    ys_arr = np.asarray(ys, dtype=float)

    if xs_arr.size == 0:
        raise ValueError("La tabla de interpolación está vacía")
    if xs_arr.size != ys_arr.size:
        raise ValueError(
            f"xs e ys deben tener la misma longitud ({xs_arr.size} != {ys_arr.size})"
        )

    if x <= xs_arr[0]:
        return float(ys_arr[0])
    if x >= xs_arr[-1]:
        return float(ys_arr[-1])

    # Primer índice con xs[i] >= x
    i = int(np.searchsorted(xs_arr, x, side="left"))

    if abs(xs_arr[i] - x) <= _EXACT_TOL:
        return float(ys_arr[i])

    x0, x1 = xs_arr[i - 1], xs_arr[i]
    y0, y1 = ys_arr[i - 1], ys_arr[i]
    if x1 == x0:
        return float(y0)

    return float(y0 + (y1 - y0) * (x - x0) / (x1 - x0))
