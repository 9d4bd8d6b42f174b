import logging

import uvicorn

from retro.config import get_settings


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Retro server using %s", settings.data_file)
    uvicorn.run("retro.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
