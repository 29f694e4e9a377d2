"""Allow ``python -m tenable_docs``."""

import sys

from .cli import main

sys.exit(main())
