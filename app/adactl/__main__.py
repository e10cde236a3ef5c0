"""Allow running adactl as ``python -m adactl``."""

from adactl.cli.main import app

if __name__ == "__main__":
    app()
