#!/usr/bin/env python3
"""Serve the Folio API with uvicorn.

Logfire is configured before the app module is imported, so errors raised
while building settings or the DI container are reported too. Local
development gets auto-reload; every other environment trusts the proxy's
forwarded headers so cookie ``Secure`` checks see the original scheme.
"""

import sys

import logfire
import uvicorn

from folio.config import load_settings
from folio.util.observability import configure_logfire


def main() -> int:
    """Start the server; startup failures are logged and re-raised."""
    settings = load_settings()
    configure_logfire(settings)

    is_local = settings.environment == "development"

    logfire.info(
        "Starting Folio API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )

    try:
        uvicorn.run(
            "folio.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            reload=is_local,
            proxy_headers=not is_local,
            forwarded_allow_ips="*",
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("Application startup failed")
        # Re-raise so the container exits non-zero
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
