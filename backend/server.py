import logging
import os

import uvicorn
from dotenv import load_dotenv

from app.config import load_settings


def main() -> None:
    # Load .env from the backend dir (where server.py lives) before reading settings.
    load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    logging.getLogger(__name__).info(
        "Sudoku Duel serving HTTP and WebSocket on http://%s:%d", settings.host, settings.port
    )
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
