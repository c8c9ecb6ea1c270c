"""Allow ``python -m treefs``."""

from treefs.cli.main import app

app()
