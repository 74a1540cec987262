"""Run the API with uvicorn: ``python -m payments_api``."""

import uvicorn

from payments_api.config import get_settings
from payments_api.entrypoints.api import create_app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
