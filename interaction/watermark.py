import logging
from typing import Any

from interaction.failures import StaleElementFailure

logger = logging.getLogger(__name__)


class NavigationWatermark:
    """
    Remembers one element of the page that was current when it was taken and
    answers whether the browser has since navigated away from that page.

    The stored handle is never re-queried: only its going stale counts as
    navigation. Consequences:
    - a new page that happens to have an equivalent root is still detected,
      because the old handle goes stale regardless of what replaced it;
    - in-page content replacement that keeps the root element (client-side
      route changes) is NOT detected.
    """

    def __init__(self, session, root: Any):
        self._session = session
        self._root = root

    @classmethod
    async def capture(cls, session) -> "NavigationWatermark":
        # ElementNotFoundFailure propagates when the page has no root yet
        root = await session.current_page_handle()
        logger.debug("Navigation watermark captured")
        return cls(session, root)

    @property
    def root(self) -> Any:
        return self._root

    async def has_navigated_away(self) -> bool:
        try:
            await self._session.read_property(self._root, "size")
        except StaleElementFailure:
            return True
        return False
