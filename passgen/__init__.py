"""
passgen - secure password generation with per-client rate limiting.
"""

from .config import Config
from .ratelimit import RateLimiter
from .service import PasswordService
from .utils.password_generator import GenerationOptions, PasswordGenerator, generate_password
from .utils.strength import Strength, StrengthReport, estimate_strength

__version__ = "0.1.0"

__all__ = [
    'Config',
    'GenerationOptions',
    'PasswordGenerator',
    'PasswordService',
    'RateLimiter',
    'Strength',
    'StrengthReport',
    'estimate_strength',
    'generate_password',
]
