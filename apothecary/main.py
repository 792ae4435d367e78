"""
Apothecary server entry point.

Run with ``apothecary-server`` or ``uvicorn apothecary.main:app``.
"""

import uvicorn

from .app.factory import create_app
from .config import get_config

app = create_app()


def main() -> None:
    config = get_config()
    uvicorn.run(
        "apothecary.main:app",
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
