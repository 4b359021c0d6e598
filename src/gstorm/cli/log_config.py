"""
Configuración de logging para la CLI.

Los módulos de cálculo solo crean loggers con logging.getLogger(__name__);
la CLI instala un único RichHandler sobre el logger raíz del paquete.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


PACKAGE_LOGGER = "gstorm"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Configura el logger del paquete.

    Args:
        verbose: DEBUG si es True, WARNING en caso contrario

    Returns:
        Logger raíz del paquete
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
