"""Allow running as ``python -m notethreads``."""

import sys

from notethreads.cli import main

sys.exit(main())
