"""
Funciones que imprimen directamente a la consola.
"""

from gstorm.cli.theme.palette import get_console, get_palette
from gstorm.cli.theme.styled import (
    styled_header, styled_label, styled_success, styled_warning,
    styled_error,
)


def format_number(value: float, decimals: int = 2) -> str:
    """Formatea un número con precisión especificada."""
    if abs(value) >= 1000:
        return f"{value:,.{decimals}f}"
    return f"{value:.{decimals}f}"


def print_separator(char: str = "-", width: int = 60) -> None:
    """Imprime un separador."""
    console = get_console()
    p = get_palette()
    console.print(char * width, style=p.border)


def print_header(text: str, subtitle: str = None) -> None:
    """Imprime un encabezado."""
    console = get_console()
    console.print(styled_header(text, subtitle))


def print_field(label: str, value, unit: str = None, indent: int = 2) -> None:
    """Imprime un campo con valor."""
    console = get_console()
    prefix = " " * indent
    console.print(prefix, styled_label(label, value, unit))


def print_success(text: str) -> None:
    """Imprime mensaje de éxito."""
    console = get_console()
    console.print(styled_success(text))


def print_warning(text: str) -> None:
    """Imprime advertencia."""
    console = get_console()
    console.print(styled_warning(text))


def print_error(text: str) -> None:
    """Imprime error."""
    console = get_console()
    console.print(styled_error(text))
