"""Shared domain utilities.

- Result type (``Ok`` / ``Err``) for explicit, expected failures
"""

from taskpie.domain.shared.result import Err, Ok, Result

__all__ = ["Ok", "Err", "Result"]
