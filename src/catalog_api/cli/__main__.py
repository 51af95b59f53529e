"""
Allow running catalogctl as a module: python -m catalog_api.cli
"""

import sys
from .catalogctl import main

if __name__ == "__main__":
    sys.exit(main())
