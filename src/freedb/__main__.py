"""Allow ``python -m freedb``."""

import sys

from freedb.cli import main

sys.exit(main())
