"""Domain service estimating the heat interval of one animal."""

from src.domain.entities.animal import AnimalCycleProfile
from src.domain.entities.forecast import Confidence, IntervalEstimate, IntervalSource

DEFAULT_HEAT_INTERVAL_DAYS = 180


def estimate_interval(
    profile: AnimalCycleProfile,
    default_days: int = DEFAULT_HEAT_INTERVAL_DAYS,
) -> IntervalEstimate:
    """Return the animal's interval and how much it can be trusted.

    An explicit interval on the profile (entered by the user or computed
    upstream from the cycle history) wins with high confidence; otherwise
    the default applies with medium confidence. The history itself is not
    analysed here.
    """
    if profile.heat_interval_days:
        return IntervalEstimate(
            days=profile.heat_interval_days,
            confidence=Confidence.HIGH,
            source=IntervalSource.EXPLICIT,
        )
    return IntervalEstimate(
        days=default_days,
        confidence=Confidence.MEDIUM,
        source=IntervalSource.DEFAULT,
    )
