"""Allow ``python -m richscan``."""

import sys

from .cli import main

sys.exit(main())
