import asyncio
import logging
from typing import Any

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    InvalidElementStateException,
    NoSuchElementException,
    StaleElementReferenceException,
    WebDriverException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support.ui import Select

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


def translate_error(error: WebDriverException, locator=None) -> InteractionFailure:
    message = getattr(error, "msg", None) or str(error)
    # Subclasses before WebDriverException
    if isinstance(error, NoSuchElementException):
        failure_type = ElementNotFoundFailure
    elif isinstance(error, StaleElementReferenceException):
        failure_type = StaleElementFailure
    elif isinstance(error, ElementClickInterceptedException):
        failure_type = ObscuredFailure
    elif isinstance(error, InvalidElementStateException):
        # covers ElementNotInteractableException
        failure_type = NotInteractableFailure
    else:
        failure_type = SessionFailure

    logger.debug(f"{type(error).__name__} → {failure_type.__name__}: {message}")
    return failure_type(message, locator=locator)


def _xpath_literal(text: str) -> str:
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = text.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


def to_by(locator: Locator):
    if locator.strategy == "css":
        return By.CSS_SELECTOR, locator.value
    if locator.strategy == "xpath":
        return By.XPATH, locator.value
    if locator.strategy == "tag":
        return By.TAG_NAME, locator.value
    if locator.strategy == "id":
        return By.ID, locator.value
    if locator.strategy == "name":
        return By.NAME, locator.value
    if locator.strategy == "text":
        return By.XPATH, f"//*[normalize-space(text())={_xpath_literal(locator.value)}]"
    raise ValueError(f"Unsupported locator strategy: {locator.strategy}")


class SeleniumSession:
    """Session capability over a Selenium WebDriver. Driver calls run in a worker thread."""

    def __init__(self, driver):
        self.driver = driver

    async def _call(self, fn, *args, locator=None):
        try:
            return await asyncio.to_thread(fn, *args)
        except WebDriverException as e:
            raise translate_error(e, locator) from e

    async def resolve(self, locator: Locator) -> Any:
        by, value = to_by(locator)
        return await self._call(self.driver.find_element, by, value, locator=locator)

    async def read_property(self, handle, name: str) -> Any:
        if name == "size":
            return await self._call(lambda: handle.size)
        return await self._call(handle.get_property, name)

    async def perform_action(self, handle, action: str, *arguments) -> Any:
        if action not in SUPPORTED_ACTIONS:
            raise ValueError(f"Unsupported action: {action}")
        return await self._call(getattr(self, f"_{action}"), handle, *arguments)

    async def current_page_handle(self) -> Any:
        return await self.resolve(ROOT_LOCATOR)

    # ─────────── Blocking action implementations ───────────

    def _click(self, el):
        el.click()

    def _fill(self, el, text):
        el.clear()
        el.send_keys(text)

    def _press(self, el, key):
        el.send_keys(getattr(Keys, key.upper(), key))

    def _check(self, el):
        if not el.is_selected():
            el.click()

    def _uncheck(self, el):
        if el.is_selected():
            el.click()

    def _hover(self, el):
        ActionChains(self.driver).move_to_element(el).perform()

    def _select_option(self, el, value):
        Select(el).select_by_value(value)

    def _inner_text(self, el):
        return el.text

    def _text_content(self, el):
        return el.get_attribute("textContent")

    def _get_attribute(self, el, name):
        return el.get_attribute(name)

    def _is_checked(self, el):
        return el.is_selected()

    def _is_visible(self, el):
        return el.is_displayed()
