"""Allow running as `python -m ddl_reorder`."""

import sys

from .cli import main

sys.exit(main())
