from abc import ABC, abstractmethod

import aiohttp

from jobfeed.log import DebugLog
from jobfeed.models import JobListing


class JobFeedBase(ABC):
    @abstractmethod
    async def load(
        self, session: aiohttp.ClientSession, debug_log: DebugLog
    ) -> list[JobListing]:
        pass
