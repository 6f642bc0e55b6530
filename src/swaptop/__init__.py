"""swaptop - live terminal dashboard for swap usage."""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
