import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from browser_session.capability import Locator
from interaction.failures import (
    FailureKind,
    InteractionFailure,
    InteractionTimeoutFailure,
    NavigatedAwayFailure,
)
from interaction.policy import RetryPolicy
from interaction.result import AttemptResult, AttemptStatus, InteractionAttempt, classify
from interaction.watermark import NavigationWatermark

logger = logging.getLogger(__name__)

Action = Callable[[Any], Union[Any, Awaitable[Any]]]


class ReliableInteractor:
    """
    Runs one UI action against a freshly resolved element, retrying transient
    failures until the policy's deadline.

    Every retry re-resolves the locator. Actions may run more than once, so
    only idempotent actions (reads, navigating clicks) belong here.
    """

    def __init__(
        self,
        session,
        policy: Optional[RetryPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.session = session
        self.policy = policy or RetryPolicy()
        self._clock = clock
        self._sleep = sleep

    async def execute(
        self,
        locator: Locator,
        action: Action,
        policy: Optional[RetryPolicy] = None,
        watermark: Optional[NavigationWatermark] = None,
    ) -> Any:
        policy = (policy or self.policy).with_max_wait(locator.within)
        start = self._clock()
        attempts = 0
        last_failure: Optional[InteractionFailure] = None

        while True:
            # 1️⃣ Resolve (not counted as an attempt)
            try:
                target = await self.session.resolve(locator)
            except InteractionFailure as e:
                if e.kind is not FailureKind.NOT_FOUND and not policy.is_retryable(e.kind):
                    raise
                if policy.max_wait == 0:
                    raise
                last_failure = e
                elapsed = self._clock() - start
                if elapsed >= policy.max_wait:
                    logger.warning(f"⏳ {locator} never became available within {policy.max_wait}s")
                    raise InteractionTimeoutFailure(locator, attempts, elapsed, e) from e
                logger.debug(f"{locator} not resolvable yet ({e}); retrying")
                await self._wait(policy, elapsed)
                continue

            # 2️⃣ Act
            attempts += 1
            result = await self._attempt(locator, target, action, policy)
            if result.succeeded:
                if attempts > 1:
                    logger.debug(f"{locator} succeeded on attempt {attempts}")
                return result.value

            failure = result.failure
            last_failure = failure
            elapsed = self._clock() - start
            logger.debug(
                f"Attempt failed: {InteractionAttempt(locator, action, attempts, elapsed, failure)}"
            )

            if result.status is AttemptStatus.TERMINAL or policy.max_wait == 0:
                raise failure

            if watermark is not None and await watermark.has_navigated_away():
                raise NavigatedAwayFailure(
                    f"Page navigated away while retrying {locator}",
                    locator=locator,
                    attempts=attempts,
                    last_failure=last_failure,
                ) from failure

            elapsed = self._clock() - start
            if elapsed >= policy.max_wait:
                logger.warning(f"⏳ Giving up on {locator} after {attempts} attempt(s): {failure}")
                raise InteractionTimeoutFailure(locator, attempts, elapsed, last_failure) from failure

            await self._wait(policy, elapsed)

    async def _attempt(self, locator: Locator, target, action: Action, policy: RetryPolicy) -> AttemptResult:
        try:
            value = action(target)
            if inspect.isawaitable(value):
                value = await value
        except InteractionFailure as failure:
            # Adapters only see the handle; attach the locator it came from
            if failure.locator is None:
                failure.locator = locator
            return classify(failure, policy)
        return AttemptResult(status=AttemptStatus.SUCCEEDED, value=value)

    async def _wait(self, policy: RetryPolicy, elapsed: float):
        # Never sleep past the deadline so the last attempt lands on it.
        remaining = policy.max_wait - elapsed
        await self._sleep(max(0.0, min(policy.poll_interval, remaining)))

    def perform(self, action: str, *arguments) -> Action:
        """Build an action that calls `action` on the resolved element."""

        def _perform(handle):
            return self.session.perform_action(handle, action, *arguments)

        _perform.__name__ = action
        return _perform

    # ─────────── Convenience interactions ───────────

    async def get(self, locator: Locator, policy: Optional[RetryPolicy] = None):
        return await self.execute(locator, lambda handle: handle, policy)

    async def exists(self, locator: Locator, policy: Optional[RetryPolicy] = None) -> bool:
        await self.get(locator, policy)
        return True

    async def click(self, locator: Locator, policy: Optional[RetryPolicy] = None, watermark=None):
        return await self.execute(locator, self.perform("click"), policy, watermark=watermark)

    async def fill(self, locator: Locator, text: str, policy: Optional[RetryPolicy] = None):
        return await self.execute(locator, self.perform("fill", text), policy)

    async def read_text(self, locator: Locator, policy: Optional[RetryPolicy] = None) -> str:
        return await self.execute(locator, self.perform("inner_text"), policy)

    # ─────────── Page navigation ───────────

    async def wait_for_navigation(
        self,
        watermark: NavigationWatermark,
        policy: Optional[RetryPolicy] = None,
    ):
        """Poll until the browser leaves the watermarked page."""
        policy = policy or self.policy
        start = self._clock()
        checks = 0
        while True:
            checks += 1
            if await watermark.has_navigated_away():
                return
            elapsed = self._clock() - start
            if elapsed >= policy.max_wait:
                raise InteractionTimeoutFailure("navigation away from the current page", checks, elapsed)
            await self._wait(policy, elapsed)

    async def ensure_on_same_page(self, watermark: NavigationWatermark):
        if await watermark.has_navigated_away():
            raise NavigatedAwayFailure("Expected to stay on the page but the browser navigated away")
