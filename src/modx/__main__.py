"""Allow ``python -m modx``."""
import sys

from modx.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
