"""scripthost - embedded scripting host.

API module lifecycle registry and interpreter error diagnostics.
"""

__version__ = "0.1.0"
