"""
algotrace
---------
Run a classical algorithm, record every micro-operation as an immutable
Step, and replay the resulting Trace at any speed.

    from algotrace import build_trace, PlaybackController
"""

from algotrace.engine import build_trace, PlaybackController

__version__ = "0.1.0"

__all__ = ["build_trace", "PlaybackController", "__version__"]
