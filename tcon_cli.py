#!/usr/bin/env python3
"""TCon Command-Line Interface launcher."""
import sys

from tcon.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
