"""
Sample Session - Caller-owned set of samples for one street

Holds the samples from one upload (or manual entry) together with the title
types they carry, and applies the title-type filter before prediction. A
session is created per request or per user; nothing is kept at module level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Final, Iterable, List, Optional, Tuple

from core.ingestion.parser import normalise_category
from core.title_engine import PredictionOutcome, Sample, TitlePredictor


logger = logging.getLogger(__name__)


# Maximum samples kept per session; later samples are dropped
MAX_SAMPLES: Final[int] = 100

ALL_CATEGORIES: Final[str] = "All"
NO_CATEGORIES: Final[str] = "None"


@dataclass
class SampleSession:
    """
    Samples for one street plus their title-type index.

    Use from_samples() to build a session so the sample cap is applied.
    """
    samples: List[Sample] = field(default_factory=list)
    dropped_count: int = 0

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> "SampleSession":
        """Create a session, keeping at most MAX_SAMPLES samples."""
        all_samples = list(samples)
        kept = all_samples[:MAX_SAMPLES]
        dropped = len(all_samples) - len(kept)
        if dropped:
            logger.warning(
                "Dropped %d samples beyond the %d sample limit", dropped, MAX_SAMPLES
            )
        return cls(samples=kept, dropped_count=dropped)

    @property
    def categories(self) -> Dict[str, str]:
        """
        Title types present, keyed by normalised form.

        The first-seen spelling is kept for display. Samples without a title
        type are not listed.
        """
        index: Dict[str, str] = {}
        for sample in self.samples:
            if not sample.category_label:
                continue
            index.setdefault(sample.normalised_category, sample.category_label)
        return index

    def filter_samples(
        self,
        selected: Optional[Iterable[str]] = None,
    ) -> Tuple[List[Sample], str]:
        """
        Apply a title-type filter.

        Args:
            selected: Title types to include (any spelling), or None for all

        Returns:
            Tuple of (matching samples, filter description for display)
        """
        if selected is None:
            return list(self.samples), ALL_CATEGORIES

        categories = self.categories
        wanted = [normalise_category(label) for label in selected]
        active = [key for key in dict.fromkeys(wanted) if key in categories]

        unknown = [key for key in wanted if key not in categories]
        if unknown:
            logger.debug("Ignoring unknown title types: %s", ", ".join(unknown))

        # Every title type ticked is the same as "All", untyped samples included
        if categories and len(active) == len(categories):
            return list(self.samples), ALL_CATEGORIES

        active_set = set(active)
        matching = [s for s in self.samples if s.normalised_category in active_set]
        description = ", ".join(categories[key] for key in active) or NO_CATEGORIES

        return matching, description

    def predict(
        self,
        target_house_number: object,
        selected: Optional[Iterable[str]] = None,
        predictor: Optional[TitlePredictor] = None,
    ) -> PredictionOutcome:
        """Filter by title type, then predict the target's title number."""
        samples, description = self.filter_samples(selected)
        predictor = predictor or TitlePredictor()
        return predictor.predict(samples, target_house_number, filter_description=description)
