"""Music theory value types: intervals, scales, filters and phrases."""

from .interval import Interval  # noqa: F401
from .scale import Scale  # noqa: F401
from .filters import DirectionFilter, IntervalFilter  # noqa: F401
from .phrase import Phrase  # noqa: F401
