#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import logging
from functools import lru_cache

from core.app_context import AppContext
from database.database import configure_database
from .config import get_config

logger = logging.getLogger(__name__)


@lru_cache()
def get_app_context() -> AppContext:
    """
    FastAPI dependency that returns the process-wide AppContext.

    The first call binds the database engine from configuration. Tests
    replace this dependency through app.dependency_overrides.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_app_context)):
            ...
    """
    config = get_config()

    engine_options = {}
    if not config.database.url.startswith("sqlite"):
        engine_options = {
            "pool_size": config.database.pool_size,
            "max_overflow": config.database.max_overflow,
        }
    configure_database(config.database.url, **engine_options)

    logger.info(f"Admission backend: {config.admission.backend}")
    return AppContext.build(config)
