"""spanjson configuration."""

from .config import ParseConfig, ParseLimits

__all__ = ['ParseConfig', 'ParseLimits']
