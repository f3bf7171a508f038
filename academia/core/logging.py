# academia/core/logging.py
import logging

from academia.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configura o logging raiz uma única vez (chamado na criação do app)."""
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # httpx loga cada request em INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
