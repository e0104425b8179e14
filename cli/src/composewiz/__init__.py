"""composewiz - pick the docker compose profiles an install should run."""

__version__ = "0.1.0"
