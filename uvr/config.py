import os

server_mode = os.getenv("SERVER_MODE", "development")
"""The operational mode of the server."""

database_url = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
"""The tortoise connection url for the database."""

sentry_dsn = os.getenv("SENTRY_DSN", None)
"""The sentry DSN, error tracking is disabled when missing."""

api_root = os.getenv("API_ROOT", "/api/v1")
"""The base url for the api."""
