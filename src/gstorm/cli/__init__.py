"""
CLI de GStorm - Hietogramas de tormentas de diseño.

Este módulo organiza los comandos CLI en sub-aplicaciones temáticas:
- storm: Generación de hietogramas (SCS, NRCS regional, Huff)
- noaa: Tablas de precipitación-frecuencia NOAA Atlas 14
"""

from typing import Annotated

import typer

from gstorm import __version__
from gstorm.cli.log_config import configure_logging

# Crear aplicación principal
app = typer.Typer(
    name="gstorm",
    help="Hietogramas de tormentas de diseño desde distribuciones tabuladas.",
    no_args_is_help=True,
)


def _register_subapps():
    """Registra sub-aplicaciones de forma diferida."""
    from gstorm.cli.noaa import noaa_app
    from gstorm.cli.storm import storm_app

    app.add_typer(storm_app, name="storm")
    app.add_typer(noaa_app, name="noaa")


@app.command()
def version():
    """Muestra la versión instalada."""
    typer.echo(f"gstorm v{__version__}")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Mostrar mensajes de depuración")] = False,
):
    """
    GStorm - Tormentas de diseño SCS/NRCS/Huff y tablas NOAA Atlas 14.
    """
    configure_logging(verbose)


_register_subapps()


# Exportar para uso externo
__all__ = [
    "app",
]
