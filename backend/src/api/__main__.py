"""Entry point for running the API server."""
import logging

import uvicorn

from core.config import get_settings


def main() -> None:
    """Run the API with uvicorn on the configured host and port."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("api.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
