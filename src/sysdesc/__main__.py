"""Allow running as ``python -m sysdesc``."""
import sys

from .cli import main

sys.exit(main())
