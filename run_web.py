#!/usr/bin/env python
"""Run the wakachi tokenization server."""

import sys

from wakachi.cli import main

if __name__ == "__main__":
    sys.exit(main())
