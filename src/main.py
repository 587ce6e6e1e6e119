import logging

import uvicorn

from config.settings import HOST, PORT, WORKERS, DEBUG, LOG_LEVEL

logger = logging.getLogger(__name__)


def run():
    """Serve the dashboard backend; reload only in debug mode."""
    logger.info(f"Starting call dashboard backend on {HOST}:{PORT}")
    uvicorn.run(
        "app:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        # uvicorn ignores workers when reload is on
        workers=1 if DEBUG else WORKERS,
        log_level=LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
