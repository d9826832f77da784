"""Allow running as ``python -m pumplaunch``."""

import sys

from pumplaunch.cli import main

sys.exit(main())
