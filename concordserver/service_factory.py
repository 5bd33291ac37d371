"""
Factory for the process-wide settings, graph store and concordance service.
"""

import logging
from pathlib import Path
from typing import Optional

from concordances.graph import SQLGraphStore, load_concepts
from concordances.logging import ServiceLogger, parse_log_level, setup_logging
from concordances.service import ConcordanceReaderInterface, ConcordanceService

from .config import Settings

# Singletons
_settings: Optional[Settings] = None
_logger: Optional[ServiceLogger] = None
_store: Optional[SQLGraphStore] = None
_service: Optional[ConcordanceService] = None


def configure(settings: Settings) -> None:
    """
    Install settings for this process. Must be called before the first request
    if the environment alone should not decide the configuration.
    """
    global _settings, _logger
    close_service()
    _settings = settings
    _logger = None


def get_settings() -> Settings:
    """
    Returns the process settings, reading the environment on first use.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_logger() -> ServiceLogger:
    """
    Returns the application logger.
    """
    global _logger
    if _logger is None:
        settings = get_settings()
        _logger = setup_logging(settings.app_system_code, settings.log_level)
    return _logger


def get_store() -> SQLGraphStore:
    """
    Returns a singleton graph store for the configured DATABASE_URL.
    """
    global _store
    if _store is None:
        settings = get_settings()
        logging.getLogger("sqlalchemy.engine").setLevel(parse_log_level(settings.db_driver_log_level))
        _store = SQLGraphStore.from_url(settings.database_url)
    return _store


def get_service() -> ConcordanceReaderInterface:
    """
    FastAPI dependency that provides the concordance service.
    """
    global _service
    if _service is None:
        _service = ConcordanceService(get_store(), get_settings().public_api_url)
    return _service


def load_concepts_at_startup(log: ServiceLogger) -> None:
    """
    Load concept documents at startup if CONCEPTS_PATH is set.
    """
    concepts_path = get_settings().concepts_path
    if not concepts_path:
        log.info("CONCEPTS_PATH not set, skipping concept load.")
        return
    if not Path(concepts_path).exists():
        log.warning("CONCEPTS_PATH '%s' does not exist, skipping concept load.", concepts_path)
        return
    count = load_concepts(get_store(), concepts_path)
    log.info("Loaded %d concepts from %s", count, concepts_path)


def close_service() -> None:
    """
    Closes the store connections and forgets the service.
    """
    global _store, _service
    if _store is not None:
        _store.close()
    _store = None
    _service = None
