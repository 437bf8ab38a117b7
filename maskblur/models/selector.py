"""
Candidate generation, best-candidate selection and acceptance
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from maskblur.models.geometry import Rect
from maskblur.models.preprocess import INVERTED, NORMAL, MaskImage, PreparedInput
from maskblur.models.search import search, to_image_rect
from maskblur.models.similarity import score
from maskblur.utils.errors import (
    EmptyRoiWarning, NoConfidentMatchError, SearchTimeoutError, report
)

logger = logging.getLogger(__name__)

# (input variant, mask variant), in search order
ORIENTATIONS: Tuple[Tuple[str, str], ...] = (
    (NORMAL, NORMAL),
    (NORMAL, INVERTED),
    (INVERTED, NORMAL),
    (INVERTED, INVERTED),
)


@dataclass(frozen=True)
class Candidate:
    """Best location of one mask for one orientation pair"""

    rect: Rect
    score: float
    mask_name: str
    image_variant: str
    mask_variant: str

    def __str__(self) -> str:
        return (f"{self.mask_name} [{self.image_variant}/{self.mask_variant}] "
                f"at {self.rect}, MSSIM {self.score:.6f}")


def candidates_for_mask(prepared: PreparedInput, mask: MaskImage,
                        roi: Rect) -> Iterator[Candidate]:
    """
    Yield one candidate per orientation pair that produced a valid window

    Matching runs on the thresholded input; scoring compares the mask
    against the un-thresholded input of the same orientation.
    """
    bounds = Rect.from_shape(prepared.shape)

    for image_variant, mask_variant in ORIENTATIONS:
        haystack = prepared.search_image(image_variant)
        needle = mask.variant(mask_variant)

        found = search(haystack, roi, needle)
        if found is None:
            continue
        offset, window = found

        rect = to_image_rect(offset, window, haystack.shape, needle.shape)
        if not bounds.contains(rect):
            report(EmptyRoiWarning(
                f"match {rect} for {mask.name} falls outside the image, skipping"),
                logger)
            continue

        rows, cols = rect.slices()
        value = score(needle, prepared.score_image(image_variant)[rows, cols])
        candidate = Candidate(rect, value, mask.name, image_variant, mask_variant)
        logger.debug(f"Candidate {candidate}")
        yield candidate


def _better(best: Optional[Candidate], candidate: Candidate) -> Optional[Candidate]:
    # strict '>' keeps the earliest maximum
    if best is None or candidate.score > best.score:
        return candidate
    return best


def select_best(candidates: Iterable[Candidate]) -> Optional[Candidate]:
    """Highest scoring candidate, the first one on ties; None if empty"""
    return reduce(_better, candidates, None)


def find_best(prepared: PreparedInput, masks: Sequence[MaskImage], roi: Rect,
              timeout: Optional[float] = None) -> Optional[Candidate]:
    """
    Search every mask in every orientation and keep the best candidate

    Args:
        prepared: Preprocessed input image
        masks: Masks in configured order
        roi: Region of interest
        timeout: Optional budget in seconds, checked between masks

    Returns:
        Best candidate or None when no orientation produced one

    Raises:
        SearchTimeoutError: If the budget runs out before the last mask
    """
    started = time.monotonic()
    best: Optional[Candidate] = None

    for idx, mask in enumerate(masks):
        if timeout is not None and idx > 0:
            elapsed = time.monotonic() - started
            if elapsed > timeout:
                raise SearchTimeoutError(
                    f"search exceeded {timeout:.2f}s after {idx} of {len(masks)} masks")

        mask_best = select_best(candidates_for_mask(prepared, mask, roi))
        if mask_best is not None:
            logger.info(f"Best for {mask.name}: {mask_best}")
            best = _better(best, mask_best)

    return best


def accept(best: Optional[Candidate], min_similarity: float) -> Candidate:
    """
    Validate the overall best candidate against the confidence floor

    Raises:
        NoConfidentMatchError: If there is no candidate or its score is
            at or below ``min_similarity``
    """
    if best is None:
        raise NoConfidentMatchError("Unable to find a good matching pattern: "
                                    "no candidate region was searched")
    if best.score <= min_similarity:
        raise NoConfidentMatchError(
            f"Unable to find a good matching pattern: best MSSIM "
            f"{best.score:.6f} <= {min_similarity}", best_score=best.score)
    return best
