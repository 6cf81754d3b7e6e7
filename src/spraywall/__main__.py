"""Entry point for ``python -m spraywall``."""

import sys

from spraywall import main

if __name__ == "__main__":
    sys.exit(main())
