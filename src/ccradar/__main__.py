"""Allow ``python -m ccradar``."""

from ccradar.cli import app

if __name__ == "__main__":
    app()
