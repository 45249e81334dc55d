"""Configuration model, validation and command-line parsing."""

from .models import ChapterConfig
from .parser import ConfigParser
from .validator import ConfigValidator

__all__ = ['ChapterConfig', 'ConfigParser', 'ConfigValidator']
