#!/usr/bin/env python3
"""
Run the trigger proxy (FastAPI) that fronts the assignment workflow webhook.
"""

import logging

from utils.config import load_settings


def main() -> None:
    import uvicorn

    from backend.server import create_app

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    logging.getLogger(__name__).info(
        "Backend running on http://%s:%s, targeting %s",
        settings.backend_host,
        settings.backend_port,
        settings.webhook_url,
    )
    uvicorn.run(
        create_app(settings),
        host=settings.backend_host,
        port=settings.backend_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
