"""FastAPI backend application entry point.

This module creates the application using the factory pattern and is the
entry point for uvicorn.
"""

import os

import uvicorn

from backend.app_factory import API_PORT_ENV, create_app
from creatures.config.server import DEFAULT_API_HOST, DEFAULT_API_PORT

# This global 'app' variable is what uvicorn looks for
app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    port = int(os.getenv(API_PORT_ENV, str(DEFAULT_API_PORT)))
    uvicorn.run("backend.main:app", host=DEFAULT_API_HOST, port=port, log_level="info")


if __name__ == "__main__":
    main()
