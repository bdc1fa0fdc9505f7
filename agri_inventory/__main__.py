"""
``python -m agri_inventory`` serves the API with uvicorn.
"""
import uvicorn

from agri_inventory.core.config import settings
from agri_inventory.core.logging import logger


def main():
    api = settings.api
    logger.info(f"Serving {api.title} {api.version} on {api.host}:{api.port} ({settings.environment.value})")

    uvicorn.run(
        "agri_inventory.main:app",
        host=api.host,
        port=api.port,
        reload=settings.debug,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
