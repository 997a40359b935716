"""
Main Application Module

This module builds the FastAPI application: cross-origin policy,
security headers, request body limits, request logging and the
liveness route.

Features:
- CORS configuration
- Security headers
- Body size limits
- Request logging
- Liveness route

Security:
- CORS policies
- Origin validation
- Credential handling
- Secure headers
- Payload limits

Dependencies:
- FastAPI for routing
- CORS middleware
- Logging

Author: Snapped Development Team
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .shared.body_limit import BodySizeLimitMiddleware
from .shared.config import Settings
from .shared.security import SecurityHeadersMiddleware

logger = logging.getLogger(__name__)

LIVENESS_HTML = "<h1>Backend is running!</h1>"


def cors_options(settings: Settings) -> dict:
    """Translate settings into CORSMiddleware keyword arguments."""
    origins = list(settings.cors_origins)
    if "*" in origins:
        origins = ["*"]
    return {
        "allow_origins": origins,
        "allow_credentials": settings.cors_credentials,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
    }


async def logging_middleware(request: Request, call_next):
    """
    Log HTTP requests and responses.

    Args:
        request: HTTP request
        call_next: Next handler

    Returns:
        Response: HTTP response
    """
    logger.info(f"Incoming request: {request.method} {request.url}")
    response = await call_next(request)
    logger.info(f"Response status: {response.status_code}")
    return response


def create_app(settings: Settings) -> FastAPI:
    """
    Build the request handling pipeline.

    Middleware runs in this order for each request: CORS, security
    headers, request logging, body size limit.

    Args:
        settings: Application settings

    Returns:
        FastAPI: Configured application
    """
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    # Starlette wraps middleware in reverse order of registration
    app.add_middleware(BodySizeLimitMiddleware, max_body_size=settings.body_limit_bytes)
    app.middleware("http")(logging_middleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(CORSMiddleware, **cors_options(settings))

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return LIVENESS_HTML

    return app
