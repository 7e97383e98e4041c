"""Entry point for running viewrender as a module.

Usage:
    python -m viewrender [command] [options]

Example:
    python -m viewrender render page.html --path templates
    python -m viewrender which page.html
"""

from viewrender.cli import app

if __name__ == "__main__":
    app()
