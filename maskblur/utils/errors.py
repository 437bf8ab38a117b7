"""
Error taxonomy for the match-and-blur pipeline

Every error carries a short ``kind`` tag next to its message so that the
CLI can report failures uniformly and map them to exit codes.
"""

import logging

logger = logging.getLogger(__name__)


class MaskBlurError(Exception):
    """Base class for fatal errors raised by the pipeline"""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ConfigurationError(MaskBlurError):
    """Bad, missing or out-of-range option"""

    kind = "configuration"


class InputDecodeError(MaskBlurError):
    """Main input image (or every mask) could not be decoded"""

    kind = "input-decode"


class NoConfidentMatchError(MaskBlurError):
    """Best similarity did not exceed the configured floor"""

    kind = "no-confident-match"

    def __init__(self, message: str, best_score: float = 0.0):
        super().__init__(message)
        self.best_score = best_score


class OutputWriteError(MaskBlurError):
    """Encoding or writing the output image failed"""

    kind = "output-write"


class SearchTimeoutError(MaskBlurError):
    """Search deadline passed before all masks were processed"""

    kind = "timeout"


class MaskBlurWarning(UserWarning):
    """Base class for recoverable conditions; logged, never fatal"""

    kind = "warning"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class MaskDecodeWarning(MaskBlurWarning):
    """A single mask could not be decoded and is skipped"""

    kind = "mask-decode"


class EmptyRoiWarning(MaskBlurWarning):
    """ROI has zero area (or cannot hold the mask) for an orientation pair"""

    kind = "empty-roi"


def report(warning: MaskBlurWarning, log: logging.Logger = logger) -> None:
    """Log a recoverable condition at WARNING level"""
    log.warning(str(warning))
