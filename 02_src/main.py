"""Main entry point for the log relay service."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from logrelay.api import create_fastapi_app
from logrelay.app import Application
from logrelay.config import RelaySettings
from logrelay.logging_config import setup_logging


def main():
    """Run the relay service."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    # Get configuration from environment
    settings = RelaySettings.from_env()
    setup_logging(log_level=settings.log_level)

    # Create FastAPI app around the relay application
    app = create_fastapi_app(Application(settings))

    # Run with uvicorn
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
