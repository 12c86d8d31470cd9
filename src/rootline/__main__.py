"""Allow running as ``python -m rootline``."""

import sys

from rootline.cli import main

sys.exit(main())
