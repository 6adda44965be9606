"""templ - directory-tree template expander."""

__version__ = "0.2.0"

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
