"""Allow running the loader as a module: python -m devstub."""

import sys

from devstub.runner import main

if __name__ == "__main__":
    sys.exit(main())
