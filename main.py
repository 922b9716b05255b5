import logging

import uvicorn

from hola_api.config import load_settings
from hola_api.main import app


def run() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    # uvicorn handles SIGINT itself: the lifespan shutdown hook logs and
    # uvicorn.run() returns, so the process exits with status 0.
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
