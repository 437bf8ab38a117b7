"""
Main processing pipeline controller
"""

import time
import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from maskblur.models.blur import blur_region, expand_rect
from maskblur.models.geometry import Rect
from maskblur.models.preprocess import MaskImage, describe, prepare_input
from maskblur.models.selector import Candidate, accept, find_best
from maskblur.utils.config import RunConfig
from maskblur.utils.io import load_masks, read_input
from maskblur.views.viz import draw_match
from maskblur.views.writers import save_image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a successful run"""

    candidate: Candidate
    blur_rect: Rect
    image: np.ndarray
    output_path: Optional[str] = None
    written: bool = False
    elapsed: float = 0.0

    @property
    def rect(self) -> Rect:
        return self.candidate.rect

    @property
    def score(self) -> float:
        return self.candidate.score


def process(cfg: RunConfig, image: np.ndarray,
            masks: Sequence[MaskImage]) -> MatchResult:
    """
    Run search, scoring, selection and blur on in-memory images

    Args:
        cfg: Run configuration
        image: Input BGR image (not modified)
        masks: Prepared masks

    Returns:
        MatchResult holding the blurred copy of ``image``

    Raises:
        NoConfidentMatchError: If nothing scores above ``cfg.min_similarity``
        SearchTimeoutError: If ``cfg.timeout`` runs out between masks
    """
    prepared = prepare_input(image, cfg.threshold)
    logger.debug(f"Thresholded coverage: {describe(prepared)}")

    best = find_best(prepared, masks, cfg.roi, timeout=cfg.timeout)
    best = accept(best, cfg.min_similarity)
    logger.info(f"Accepted {best}")

    blur_rect = expand_rect(best.rect, cfg.blur_margin, image.shape)
    blurred = blur_region(image, blur_rect, cfg.blur_kernel_size, cfg.blur_deviation)
    return MatchResult(candidate=best, blur_rect=blur_rect, image=blurred)


def run(cfg: RunConfig) -> MatchResult:
    """
    Decode inputs, locate the best match, blur it and write the output

    Args:
        cfg: Validated run configuration

    Returns:
        MatchResult; ``written`` is False in dry-run mode
    """
    start_time = time.time()

    logger.info(f"Input file: {cfg.input_path}")
    logger.info(f"Output file: {cfg.output_path}")
    logger.info(f"Threshold: {cfg.threshold}")
    logger.info(f"Blur kernel size: {cfg.blur_kernel_size}")
    logger.info(f"Blur deviation: {cfg.blur_deviation}")
    logger.info(f"ROI: {cfg.roi}")
    logger.info(f"Blur margin: {tuple(cfg.blur_margin)}")

    image = read_input(cfg.input_path)
    masks = load_masks(cfg.mask_paths)

    result = process(cfg, image, masks)

    if cfg.debug_overlay_path and cfg.dry_run:
        logger.info(f"Dry run: not writing debug overlay {cfg.debug_overlay_path}")
    elif cfg.debug_overlay_path:
        overlay = draw_match(image, result.rect, result.blur_rect,
                             f"{result.score:.3f}")
        save_image(cfg.debug_overlay_path, overlay)
        logger.info(f"Saved debug overlay: {cfg.debug_overlay_path}")

    written = False
    if cfg.dry_run:
        logger.info(f"Dry run: not writing {cfg.output_path} (MSSIM {result.score:.6f})")
    else:
        logger.info(f"Writing to file {cfg.output_path} using MSSIM {result.score:.6f}")
        save_image(cfg.output_path, result.image)
        written = True

    elapsed = time.time() - start_time
    logger.info(f"Completed in {elapsed:.2f} seconds")

    return MatchResult(
        candidate=result.candidate,
        blur_rect=result.blur_rect,
        image=result.image,
        output_path=cfg.output_path,
        written=written,
        elapsed=elapsed,
    )
