"""Entry point: run the API server with uvicorn"""

import uvicorn

from twitchtools.app import create_app
from twitchtools.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
