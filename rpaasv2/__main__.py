"""Allow running the CLI with ``python -m rpaasv2``."""

from rpaasv2.cli.app import main

if __name__ == "__main__":
    main()
