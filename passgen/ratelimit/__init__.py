"""
Rate limiting for passgen.

Provides a per-client sliding-window limiter for password requests.
"""

from .limiter import RateLimiter

__all__ = ['RateLimiter']
