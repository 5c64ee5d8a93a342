"""Package entry point for ``python -m samcompare``."""

import sys
from samcompare.cli import main

if __name__ == "__main__":
    sys.exit(main())
