"""Error handling for retrycase.

- RetryConfigError: the only exception the retry engine raises
- Result/Ok/Err: fallible-result values understood by Condition.on_error()
- Fallible: protocol any caller-defined result type can implement
- try_fn: adapter turning exceptions into Err values
"""

from .errors import RetryConfigError
from .result import Err, Fallible, Ok, Result, is_fallible_type, try_fn

__all__ = [
    "RetryConfigError",
    "Result", "Ok", "Err", "Fallible", "is_fallible_type", "try_fn",
]
