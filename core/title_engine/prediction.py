"""
Prediction Orchestrator for the Title Engine

Pipeline order:
1. PARTITION - Keep samples matching the target's parity
2. TRANSFORM - Map house numbers to sequence index n
3. FIT - Least-squares line over (n, title)
4. CORRECT - If R² < 90% and n >= 3, ignore the single worst sample and re-fit
5. CLASSIFY - High / Note / Low
6. PREDICT - Evaluate the final line at the target's n and round half up

Every call is independent: no state is kept between predictions.
"""

import logging
import math
from typing import Optional, Sequence, Tuple

from .errors import DegenerateInputError, InvalidTargetError
from .models import (
    Confidence,
    FitResult,
    PredictionOutcome,
    Sample,
    TargetQuery,
)
from .outliers import find_worst_residual
from .partition import (
    describe_transform,
    partition_by_parity,
    transform_house_number,
)
from .regression import fit_line


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

# R² percentage required for a confident result
CONFIDENCE_THRESHOLD = 90

# Outlier correction needs at least this many samples
MIN_SAMPLES_FOR_OUTLIER = 3

MESSAGE_HIGH = "The data points form a strong linear pattern. The result is likely correct."
MESSAGE_INCONSISTENT = (
    "The data points are inconsistent and do not form a clear pattern. "
    "The result is likely INCORRECT. Please double-check your data entries."
)
MESSAGE_MORE_DATA = (
    "The data points form a line, but more data is needed to confirm the pattern."
)


def parse_target(value: object) -> int:
    """
    Validate a target house number.

    Accepts ints and integer strings ("  12 "). Rejects booleans, floats with
    a fraction, and values <= 0.

    Raises:
        InvalidTargetError: value is not a positive integer
    """
    if isinstance(value, bool):
        raise InvalidTargetError(value)

    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise InvalidTargetError(value) from None
    else:
        raise InvalidTargetError(value)

    if number <= 0:
        raise InvalidTargetError(value)

    return number


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties toward positive infinity.

    105.5 -> 106, -0.5 -> 0, -1.5 -> -1.
    """
    return int(math.floor(value + 0.5))


class TitlePredictor:
    """
    Predicts a title number from sample (house, title) pairs.

    Thresholds are fixed policy, not configuration.
    """

    def predict(
        self,
        samples: Sequence[Sample],
        target_house_number: object,
        filter_description: str = "All",
    ) -> PredictionOutcome:
        """
        Predict the title number for a house.

        Args:
            samples: Samples to learn from (category filter already applied)
            target_house_number: House number to predict for
            filter_description: Active category filter, for display

        Returns:
            PredictionOutcome, including Low confidence results

        Raises:
            InvalidTargetError: target is not a positive integer
            InsufficientDataError: fewer than 2 samples share the target's parity
            DegenerateInputError: all matching house numbers are identical
        """
        query = TargetQuery(parse_target(target_house_number))
        target = query.house_number
        parity = query.parity

        # Step 1: Partition by parity
        matching = partition_by_parity(samples, target)

        # Step 2: Transform
        xs = [transform_house_number(s.house_number, parity) for s in matching]
        ys = [s.title_number for s in matching]

        # Step 3: Initial fit
        initial_fit = fit_line(xs, ys)
        initial_percent = initial_fit.r_squared_percent

        # Steps 4-5: Correct and classify
        final_fit = initial_fit
        excluded: Optional[Sample] = None

        if initial_percent >= CONFIDENCE_THRESHOLD:
            confidence = Confidence.HIGH
            message = MESSAGE_HIGH
        elif len(matching) >= MIN_SAMPLES_FOR_OUTLIER:
            corrected = self._correct_single_outlier(matching, xs, ys, initial_fit)
            if corrected is not None:
                final_fit, excluded = corrected
                confidence = Confidence.NOTE
                message = (
                    f"We automatically ignored House No. {excluded.house_number} "
                    f"as it was an outlier. This improved the confidence from "
                    f"{initial_percent:.1f}% to {final_fit.r_squared_percent:.1f}%."
                )
            else:
                confidence = Confidence.LOW
                message = MESSAGE_INCONSISTENT
        else:
            confidence = Confidence.LOW
            message = MESSAGE_MORE_DATA

        # Step 6: Predict with the same transform
        target_n = transform_house_number(target, parity)
        raw_prediction = final_fit.predict(target_n)

        logger.info(
            "Predicted title %s for house %s (%s, R²=%.1f%%, %d samples)",
            round_half_up(raw_prediction),
            target,
            confidence.value,
            final_fit.r_squared_percent,
            len(matching),
        )

        return PredictionOutcome(
            target_house_number=target,
            predicted_title_number=round_half_up(raw_prediction),
            raw_prediction=raw_prediction,
            parity=parity,
            transform_description=describe_transform(parity),
            fit=final_fit,
            initial_fit=initial_fit,
            confidence=confidence,
            message=message,
            samples_used=len(matching) - (1 if excluded else 0),
            excluded_sample=excluded,
            filter_description=filter_description,
            samples=tuple(matching),
        )

    def _correct_single_outlier(
        self,
        samples: Sequence[Sample],
        xs: Sequence[float],
        ys: Sequence[float],
        fit: FitResult,
    ) -> Optional[Tuple[FitResult, Sample]]:
        """
        Drop the worst-residual sample and re-fit.

        Returns:
            (corrected fit, excluded sample) if the re-fit reaches the
            threshold, otherwise None (the original fit stands)
        """
        outlier = find_worst_residual(
            xs,
            ys,
            [s.house_number for s in samples],
            fit.slope,
            fit.intercept,
        )

        # Rebuild x, y and samples in lockstep
        keep = [i for i in range(len(samples)) if i != outlier.index]
        corrected_xs = [xs[i] for i in keep]
        corrected_ys = [ys[i] for i in keep]

        try:
            corrected_fit = fit_line(corrected_xs, corrected_ys)
        except DegenerateInputError:
            logger.debug(
                "Re-fit without house %s is degenerate", outlier.house_number
            )
            return None

        if corrected_fit.r_squared_percent < CONFIDENCE_THRESHOLD:
            logger.debug(
                "Ignoring house %s only reaches R²=%.1f%%",
                outlier.house_number,
                corrected_fit.r_squared_percent,
            )
            return None

        return corrected_fit, samples[outlier.index]


def predict_title_number(
    samples: Sequence[Sample],
    target_house_number: object,
    filter_description: str = "All",
) -> PredictionOutcome:
    """Convenience wrapper around TitlePredictor.predict."""
    return TitlePredictor().predict(samples, target_house_number, filter_description)
