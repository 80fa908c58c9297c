"""Allow ``python -m hexcrypt``."""

import sys

from .cli import main

sys.exit(main())
