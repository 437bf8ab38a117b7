"""
Configuration loader and validator
"""

import yaml
import os
import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Sequence, Tuple, Union

from maskblur.models.geometry import Rect
from maskblur.models.blur import BlurMargin
from maskblur.utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Dict[str, Any]] = {
    'paths': {
        'input': None,
        'output': None,
        'masks': [],
        'debug_overlay': None,
    },
    'search': {
        'threshold': 80.0,
        'roi': [0, 0, 0, 0],
        'min_similarity': 0.1,
        'timeout': None,
    },
    'blur': {
        'kernel_size': 3,
        'deviation': 10,
        'margin': [0, 0, 0, 0],
    },
    'run': {
        'dry_run': False,
        'verbosity': 0,
    },
}


@dataclass(frozen=True)
class RunConfig:
    """Immutable settings for one match-and-blur run"""

    input_path: str
    output_path: str
    mask_paths: Tuple[str, ...]
    threshold: float = 80.0
    blur_kernel_size: int = 3
    blur_deviation: int = 10
    roi: Rect = Rect(0, 0, 0, 0)
    blur_margin: BlurMargin = field(default_factory=BlurMargin)
    min_similarity: float = 0.1
    dry_run: bool = False
    verbosity: int = 0
    timeout: Optional[float] = None
    debug_overlay_path: Optional[str] = None

    def validate(self) -> "RunConfig":
        """
        Check option ranges

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: On the first invalid option
        """
        if not self.input_path:
            raise ConfigurationError("input file expected")
        if not self.output_path:
            raise ConfigurationError("output file expected")
        if not self.mask_paths:
            raise ConfigurationError("Mask image(s) expected")
        if not 0 <= self.threshold <= 255:
            raise ConfigurationError(
                f"Invalid threshold value {self.threshold}, expected 0..255")
        if self.blur_kernel_size <= 0 or self.blur_kernel_size % 2 == 0:
            raise ConfigurationError(
                f"Invalid kernel size {self.blur_kernel_size}, expected a positive odd integer")
        if self.blur_deviation < 0:
            raise ConfigurationError(
                f"Invalid Gaussian blur deviation {self.blur_deviation}")
        if any(v < 0 for v in self.blur_margin):
            raise ConfigurationError(
                f"Invalid blur margin {tuple(self.blur_margin)}, values must be non-negative")
        if not 0.0 <= self.min_similarity <= 1.0:
            raise ConfigurationError(
                f"Invalid minimum similarity {self.min_similarity}, expected 0..1")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"Invalid timeout {self.timeout}")
        return self

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RunConfig":
        """
        Build a validated RunConfig from a sectioned configuration dict

        Args:
            config: Dictionary shaped like ``configs/config.yaml``

        Returns:
            Validated RunConfig
        """
        config = copy.deepcopy(config)
        _set_defaults(config)
        paths = config['paths']
        search = config['search']
        blur = config['blur']
        run = config['run']

        masks = paths.get('masks') or []
        if isinstance(masks, str):
            masks = [masks]

        timeout = search.get('timeout')
        return cls(
            input_path=paths.get('input') or '',
            output_path=paths.get('output') or '',
            mask_paths=tuple(str(m) for m in masks),
            threshold=_number(search['threshold'], float, "Invalid threshold value"),
            blur_kernel_size=_number(blur['kernel_size'], int, "Invalid kernel size"),
            blur_deviation=_number(blur['deviation'], int, "Invalid Gaussian blur deviation"),
            roi=parse_rect(search['roi']),
            blur_margin=parse_margin(blur['margin']),
            min_similarity=_number(search['min_similarity'], float,
                                   "Invalid minimum similarity"),
            dry_run=bool(run.get('dry_run', False)),
            verbosity=_number(run.get('verbosity', 0), int, "Invalid verbosity"),
            timeout=None if timeout is None else _number(timeout, float, "Invalid timeout"),
            debug_overlay_path=paths.get('debug_overlay'),
        ).validate()


def _number(value: Any, kind: type, message: str):
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ConfigurationError(f"{message}: {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{message}: {value!r}") from None


def _parse_ints(value: Union[str, Sequence[int]], count: int,
                what: str) -> Tuple[int, ...]:
    """
    Parse up to ``count`` comma separated integers

    Missing trailing fields keep their zero default, as in ``0,-500``.
    """
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(',') if p.strip()]
    else:
        parts = list(value)
    if len(parts) > count:
        raise ConfigurationError(f"Invalid {what} {value!r}: at most {count} values")

    numbers = [0] * count
    for idx, part in enumerate(parts):
        try:
            numbers[idx] = int(part)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid {what} {value!r}") from None
    return tuple(numbers)


def parse_rect(value: Union[str, Sequence[int]]) -> Rect:
    """Parse ``x,y,width,height`` into a Rect"""
    return Rect(*_parse_ints(value, 4, "ROI"))


def parse_margin(value: Union[str, Sequence[int]]) -> BlurMargin:
    """Parse ``top,right,bottom,left`` into a BlurMargin"""
    return BlurMargin(*_parse_ints(value, 4, "blur margin"))


def default_config() -> Dict[str, Any]:
    """Configuration dictionary holding only the defaults"""
    config: Dict[str, Any] = {}
    _set_defaults(config)
    return config


def load_config(config_path: str = "configs/config.yaml") -> Dict[str, Any]:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Dictionary containing configuration

    Raises:
        ConfigurationError: If the file is missing or not valid YAML
    """
    if not os.path.exists(config_path):
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration: {e}")
        raise ConfigurationError(f"Error parsing {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

    for section in DEFAULTS:
        if section not in config:
            logger.debug(f"Missing configuration section: {section}")

    _set_defaults(config)
    logger.info(f"Configuration loaded from {config_path}")
    return config


def _set_defaults(config: Dict[str, Any]) -> None:
    """Set default values for missing configuration parameters"""
    for section, defaults in DEFAULTS.items():
        if config.get(section) is None:
            config[section] = {}
        for key, value in defaults.items():
            config[section].setdefault(key, copy.deepcopy(value))


def update_config(config: Dict[str, Any],
                  overrides: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Update configuration with command-line overrides

    Args:
        config: Base configuration dictionary
        overrides: ``{section: {key: value}}``; None values are ignored

    Returns:
        Updated configuration dictionary
    """
    for section, values in (overrides or {}).items():
        config.setdefault(section, {})
        for key, value in values.items():
            if value is not None:
                config[section][key] = value
                logger.debug(f"Override config.{section}.{key} = {value}")

    return config
