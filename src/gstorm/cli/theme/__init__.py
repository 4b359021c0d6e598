"""
Sistema de temas para la interfaz CLI de GStorm.

El paquete esta organizado en modulos:
- palette: Definicion de paletas y gestion de temas (CLITheme, ColorPalette)
- styled: Funciones que retornan objetos Text estilizados
- printing: Funciones que imprimen directamente a consola
- tables: Funciones para crear e imprimir tablas Rich
"""

# Desde palette
from gstorm.cli.theme.palette import (
    ColorPalette,
    THEME_DEFAULT,
    CLITheme,
    get_console,
    get_palette,
)

# Desde styled
from gstorm.cli.theme.styled import (
    styled_header,
    styled_label,
    styled_success,
    styled_warning,
    styled_error,
)

# Desde printing
from gstorm.cli.theme.printing import (
    format_number,
    print_separator,
    print_header,
    print_field,
    print_success,
    print_warning,
    print_error,
)

# Desde tables
from gstorm.cli.theme.tables import (
    create_results_table,
    print_capabilities_table,
    print_frequency_table,
    print_hyetograph_table,
)

__all__ = [
    # palette
    "ColorPalette",
    "THEME_DEFAULT",
    "CLITheme",
    "get_console",
    "get_palette",
    # styled
    "styled_header",
    "styled_label",
    "styled_success",
    "styled_warning",
    "styled_error",
    # printing
    "format_number",
    "print_separator",
    "print_header",
    "print_field",
    "print_success",
    "print_warning",
    "print_error",
    # tables
    "create_results_table",
    "print_capabilities_table",
    "print_frequency_table",
    "print_hyetograph_table",
]
