"""
Controllers package for handling application logic flow
"""

from .pipeline import run, process, MatchResult
from .cli import main

__all__ = ['run', 'process', 'MatchResult', 'main']
