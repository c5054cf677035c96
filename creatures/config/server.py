"""Server configuration constants."""

DEFAULT_API_PORT = 8000
DEFAULT_API_HOST = "0.0.0.0"
