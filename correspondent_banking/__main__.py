"""Main entry point for the capabilities demo"""

import sys

from .demo import main

if __name__ == "__main__":
    sys.exit(main())
