import logging
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from browser_session.capability import ROOT_LOCATOR, SUPPORTED_ACTIONS, Locator
from interaction.failures import (
    ElementNotFoundFailure,
    InteractionFailure,
    NotInteractableFailure,
    ObscuredFailure,
    SessionFailure,
    StaleElementFailure,
)

logger = logging.getLogger(__name__)

_STALE_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "node is detached",
    "execution context was destroyed",
    "jshandle is disposed",
    "elementhandle is disposed",
    "cannot find context with specified id",
)
_OBSCURED_MARKERS = ("intercepts pointer events",)
_CLOSED_MARKERS = (
    "target closed",
    "has been closed",
    "browser has disconnected",
    "connection closed",
)
_NOT_INTERACTABLE_MARKERS = (
    "not visible",
    "not enabled",
    "not editable",
    "not stable",
    "outside of the viewport",
)

# Handle methods that accept a `timeout` keyword (milliseconds)
_TIMED_ACTIONS = {"click", "fill", "press", "check", "uncheck", "hover", "select_option"}

_SIZE_SCRIPT = """el => {
    if (!el.isConnected) throw new Error('Element is not attached to the DOM');
    const r = el.getBoundingClientRect();
    return {width: r.width, height: r.height};
}"""
_PROPERTY_SCRIPT = """(el, name) => {
    if (!el.isConnected) throw new Error('Element is not attached to the DOM');
    return el[name];
}"""


def translate_error(error: PlaywrightError, locator=None) -> InteractionFailure:
    """Map a Playwright error onto the failure taxonomy by its message."""
    message = getattr(error, "message", None) or str(error)
    msg = message.lower()

    if any(marker in msg for marker in _STALE_MARKERS):
        failure_type = StaleElementFailure
    elif any(marker in msg for marker in _OBSCURED_MARKERS):
        failure_type = ObscuredFailure
    elif any(marker in msg for marker in _CLOSED_MARKERS):
        failure_type = SessionFailure
    elif isinstance(error, PlaywrightTimeoutError) or any(marker in msg for marker in _NOT_INTERACTABLE_MARKERS):
        failure_type = NotInteractableFailure
    else:
        failure_type = SessionFailure

    logger.debug(f"Playwright error → {failure_type.__name__}: {message}")
    return failure_type(message, locator=locator)


def _quote_attribute(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def to_selector(locator: Locator) -> str:
    if locator.strategy in ("css", "tag"):
        return locator.value
    if locator.strategy == "xpath":
        return f"xpath={locator.value}"
    if locator.strategy == "id":
        return f'[id="{_quote_attribute(locator.value)}"]'
    if locator.strategy == "name":
        return f'[name="{_quote_attribute(locator.value)}"]'
    if locator.strategy == "text":
        return f"text={locator.value}"
    raise ValueError(f"Unsupported locator strategy: {locator.strategy}")


class PlaywrightSession:
    """Session capability over a Playwright page (a Stagehand page works too)."""

    def __init__(self, page, action_timeout: float = 2.0):
        self.page = page
        self.action_timeout_ms = int(action_timeout * 1000)

    async def resolve(self, locator: Locator) -> Any:
        selector = to_selector(locator)
        try:
            handle = await self.page.query_selector(selector)
        except PlaywrightError as e:
            raise translate_error(e, locator) from e
        if handle is None:
            raise ElementNotFoundFailure(f"No element matches {locator}", locator=locator)
        return handle

    async def read_property(self, handle, name: str) -> Any:
        try:
            if name == "size":
                return await handle.evaluate(_SIZE_SCRIPT)
            return await handle.evaluate(_PROPERTY_SCRIPT, name)
        except PlaywrightError as e:
            raise translate_error(e) from e

    async def perform_action(self, handle, action: str, *arguments) -> Any:
        if action not in SUPPORTED_ACTIONS:
            raise ValueError(f"Unsupported action: {action}")
        method = getattr(handle, action)
        kwargs = {"timeout": self.action_timeout_ms} if action in _TIMED_ACTIONS else {}
        try:
            return await method(*arguments, **kwargs)
        except PlaywrightError as e:
            raise translate_error(e) from e

    async def current_page_handle(self) -> Any:
        return await self.resolve(ROOT_LOCATOR)
