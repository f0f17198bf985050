"""
Utility modules for blockconf.

Example:
    from blockconf.utils.logging_config import get_logger
"""

from blockconf.utils.logging_config import get_logger, setup_logger

__all__ = [
    "setup_logger",
    "get_logger",
]
