"""Allow running as ``python -m kontrolhid``."""

from kontrolhid.cli import cli

if __name__ == "__main__":
    cli()
