"""
Parity partitioning and coordinate transform for the Title Engine.

Odd and even house numbers on a street usually form two independent
sequences, so only samples on the target's side of the street are used.
Each house number is then mapped to its position in that sequence:

- Even: n = HouseNo / 2          (2, 4, 6 -> 1, 2, 3)
- Odd:  n = (HouseNo + 1) / 2    (1, 3, 5 -> 1, 2, 3)

The same transform must be applied to every sample and to the target.
"""

from typing import List, Sequence

from .errors import InsufficientDataError
from .models import Parity, Sample


# =============================================================================
# Configuration Constants
# =============================================================================

# Minimum matching samples needed to fit a line
MIN_SAMPLES = 2

TRANSFORM_DESCRIPTIONS = {
    Parity.EVEN: "(HouseNo / 2)",
    Parity.ODD: "(HouseNo + 1) / 2",
}


def partition_by_parity(
    samples: Sequence[Sample],
    target_house_number: int,
) -> List[Sample]:
    """
    Keep only samples on the same side of the street as the target.

    Args:
        samples: Candidate samples (already category-filtered by the caller)
        target_house_number: House number being predicted

    Returns:
        Matching samples, in their original order

    Raises:
        InsufficientDataError: fewer than MIN_SAMPLES samples match
    """
    parity = Parity.of(target_house_number)
    matching = [s for s in samples if Parity.of(s.house_number) == parity]

    if len(matching) < MIN_SAMPLES:
        raise InsufficientDataError(
            found=len(matching),
            required=MIN_SAMPLES,
            parity=parity.value,
        )

    return matching


def transform_house_number(house_number: int, parity: Parity) -> float:
    """Map a house number to its sequence index for the given parity."""
    if parity == Parity.EVEN:
        return house_number / 2
    return (house_number + 1) / 2


def describe_transform(parity: Parity) -> str:
    """Display form of the transform, e.g. '(HouseNo / 2)'."""
    return TRANSFORM_DESCRIPTIONS[parity]
