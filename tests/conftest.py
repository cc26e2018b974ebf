"""Shared fixtures: an in-memory browsing session and a controllable clock."""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from browser_session.capability import ROOT_LOCATOR, Locator
from interaction.failures import (
    ElementNotFoundFailure,
    SessionFailure,
    StaleElementFailure,
)


class FakeClock:
    """monotonic() + async sleep() where sleeping just moves time forward."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeElement:
    _ids = itertools.count(1)

    def __init__(self, key: str, page: int):
        self.id = next(self._ids)
        self.key = key
        self.page = page
        self.attached = True

    def __repr__(self):
        state = "attached" if self.attached else "detached"
        return f"<FakeElement {self.key} #{self.id} page={self.page} {state}>"


class FakeSession:
    """A tiny DOM: a dict of locator value -> element for the current page."""

    def __init__(self, keys=("html", "body")):
        self.page = 0
        self.elements: dict[str, FakeElement] = {}
        self.resolve_calls: list[Locator] = []
        self.actions: list[tuple[FakeElement, str, tuple]] = []
        self.action_results: dict[str, Any] = {}
        self.broken = False
        self._load(keys)

    def _load(self, keys):
        self.page += 1
        self.elements = {key: FakeElement(key, self.page) for key in keys}

    def navigate(self, keys=("html", "body")):
        for element in self.elements.values():
            element.attached = False
        self._load(keys)

    def add(self, key: str) -> FakeElement:
        self.elements[key] = FakeElement(key, self.page)
        return self.elements[key]

    def rerender(self, key: str) -> FakeElement:
        """Replace one element in place, leaving the rest of the page alone."""
        old = self.elements.get(key)
        if old is not None:
            old.attached = False
        return self.add(key)

    def remove(self, key: str):
        element = self.elements.pop(key)
        element.attached = False

    async def resolve(self, locator: Locator):
        self.resolve_calls.append(locator)
        if self.broken:
            raise SessionFailure("driver disconnected", locator=locator)
        element = self.elements.get(locator.value)
        if element is None:
            raise ElementNotFoundFailure(f"No element matches {locator}", locator=locator)
        return element

    async def read_property(self, handle: FakeElement, name: str):
        if self.broken:
            raise SessionFailure("driver disconnected")
        if not handle.attached:
            raise StaleElementFailure(f"{handle} is no longer attached")
        if name == "size":
            return {"width": 1280, "height": 800}
        return None

    async def perform_action(self, handle: FakeElement, action: str, *arguments):
        if not handle.attached:
            raise StaleElementFailure(f"{handle} is no longer attached")
        self.actions.append((handle, action, arguments))
        return self.action_results.get(action)

    async def current_page_handle(self):
        return await self.resolve(ROOT_LOCATOR)


class ScriptedAction:
    """Raises the scripted failures in order, then returns `result`."""

    def __init__(self, failures=(), result="done", is_async=False):
        self.failures = list(failures)
        self.result = result
        self.is_async = is_async
        self.targets: list[Any] = []

    @property
    def calls(self) -> int:
        return len(self.targets)

    def _run(self, target):
        self.targets.append(target)
        if self.failures:
            raise self.failures.pop(0)
        return self.result

    def __call__(self, target):
        if not self.is_async:
            return self._run(target)

        async def _async():
            return self._run(target)

        return _async()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
