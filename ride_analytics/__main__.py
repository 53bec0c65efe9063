"""Allow running the CLI with ``python -m ride_analytics``."""

import sys

from ride_analytics.cli import main

if __name__ == "__main__":
    sys.exit(main())
