#!/usr/bin/env python3
"""
CareMatch API - FastAPI Application

Course enrollment and teacher matching for after-school care.

Usage:
    python main.py serve

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException

from core.exceptions import CareError
from .config import get_config
from .exceptions import (
    care_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import (
    enrollments_router,
    matching_router,
    parameters_router
)
from .routers.enrollments import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()

# Create FastAPI app
app = FastAPI(
    title="CareMatch API",
    description="Course enrollment admission control and teacher matching",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure rate limiting
add_rate_limit_handlers(app)

# Register exception handlers
app.add_exception_handler(CareError, care_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(enrollments_router)
app.include_router(matching_router)
app.include_router(parameters_router)


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "carematch-api"}


def main():
    """Run the web server."""
    import uvicorn

    logger.info(f"Starting CareMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
