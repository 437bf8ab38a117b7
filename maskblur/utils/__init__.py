"""
Utility functions for errors, I/O and configuration management
"""

from .errors import (
    MaskBlurError, ConfigurationError, InputDecodeError, NoConfidentMatchError,
    OutputWriteError, SearchTimeoutError, MaskBlurWarning, MaskDecodeWarning,
    EmptyRoiWarning
)
from .config import (
    RunConfig, load_config, update_config, default_config, parse_rect, parse_margin
)
from .io import read_image, read_input, load_masks

__all__ = [
    'MaskBlurError', 'ConfigurationError', 'InputDecodeError',
    'NoConfidentMatchError', 'OutputWriteError', 'SearchTimeoutError',
    'MaskBlurWarning', 'MaskDecodeWarning', 'EmptyRoiWarning',
    'RunConfig', 'load_config', 'update_config', 'default_config',
    'parse_rect', 'parse_margin',
    'read_image', 'read_input', 'load_masks'
]
