import logging
import random
from typing import Optional, TypeVar

from shared.exceptions import InjectedFaultError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FaultInjector:
    """
    Randomly fails reads so callers can exercise their timeout and retry paths.

    A fault fires when fault_percent >= r, with r drawn from the closed range
    [1, 100]: fault_percent=100 always fails, fault_percent=1 fails about 1%
    of the time and fault_percent=0 never draws.
    """

    MIN_THRESHOLD = 1
    MAX_THRESHOLD = 100

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def apply(self, entity: T, fault_percent: int) -> T:
        """Return the entity unchanged, or raise InjectedFaultError on bad luck."""
        if fault_percent == 0:
            return entity

        random_threshold = self.rng.randint(self.MIN_THRESHOLD, self.MAX_THRESHOLD)

        if fault_percent < random_threshold:
            logger.debug(f"We got lucky, no error occurred, {fault_percent} < {random_threshold}")
            return entity

        logger.debug(f"Bad luck, an error occurred, {fault_percent} >= {random_threshold}")
        raise InjectedFaultError("Something went wrong...")
