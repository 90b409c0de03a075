from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .types import City, WeatherSnapshot


class WeatherFetcher(ABC):
    """Abstract base for batched current-weather fetchers."""

    @abstractmethod
    async def fetch(self, cities: Sequence[City]) -> WeatherSnapshot:
        """Return current conditions for every city in one upstream call.

        Implementations never raise for upstream problems; they return
        `WeatherSnapshot.failed()` instead.
        """
