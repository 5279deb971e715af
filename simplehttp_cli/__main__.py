"""
Module execution entry point.

Allows running with: python -m simplehttp_cli
"""

import sys
from simplehttp_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
