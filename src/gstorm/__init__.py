"""
GStorm - Hietogramas de tormentas de diseño.

Genera hietogramas a partir de distribuciones temporales tabuladas
(SCS/TR-55, NRCS regionales y curvas Huff) y lee tablas de
precipitación-frecuencia de NOAA Atlas 14 (PFDS).
"""

__version__ = "0.3.0"
