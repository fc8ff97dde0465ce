"""Run the service with uvicorn: `python -m notes_api`."""

import uvicorn

from notes_api.config import settings


def main() -> None:
    uvicorn.run(
        "notes_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
