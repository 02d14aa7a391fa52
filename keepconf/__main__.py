"""Entry point for running keepconf as a module.

This allows running the application with:
    python -m keepconf [OPTIONS] COMMAND [ARGS]
"""

from keepconf.cli import app

if __name__ == "__main__":
    app()
