"""
Utility helpers
"""

from .cancellation import (
    CancellationToken,
    raise_if_cancelled,
    run_until_disconnected,
)

__all__ = [
    'CancellationToken',
    'raise_if_cancelled',
    'run_until_disconnected',
]
