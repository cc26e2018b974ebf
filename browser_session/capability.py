from dataclasses import dataclass, replace
from typing import Any, Optional, Protocol


@dataclass(frozen=True)
class Locator:
    """Where to find an element. `within` overrides the policy's max_wait."""

    strategy: str
    value: str
    within: Optional[float] = None

    @classmethod
    def css(cls, selector: str) -> "Locator":
        return cls("css", selector)

    @classmethod
    def xpath(cls, expression: str) -> "Locator":
        return cls("xpath", expression)

    @classmethod
    def tag(cls, name: str) -> "Locator":
        return cls("tag", name)

    @classmethod
    def id(cls, element_id: str) -> "Locator":
        return cls("id", element_id)

    @classmethod
    def name(cls, name: str) -> "Locator":
        return cls("name", name)

    @classmethod
    def text(cls, text: str) -> "Locator":
        return cls("text", text)

    def wait_within(self, seconds: float) -> "Locator":
        return replace(self, within=seconds)

    def __str__(self):
        suffix = f" within {self.within}s" if self.within is not None else ""
        return f"{self.strategy}={self.value!r}{suffix}"


ROOT_LOCATOR = Locator.tag("html")


class SessionCapability(Protocol):
    """What the reliability layer needs from a live browsing session.

    Implementations translate their driver's errors into the
    interaction.failures taxonomy; nothing else may escape.
    """

    async def resolve(self, locator: Locator) -> Any:
        ...

    async def read_property(self, handle: Any, name: str) -> Any:
        ...

    async def perform_action(self, handle: Any, action: str, *arguments) -> Any:
        ...

    async def current_page_handle(self) -> Any:
        ...


# Actions every adapter understands, dispatched as a method name plus arguments.
SUPPORTED_ACTIONS = frozenset(
    {
        "click",
        "fill",
        "press",
        "check",
        "uncheck",
        "hover",
        "select_option",
        "inner_text",
        "text_content",
        "get_attribute",
        "is_checked",
        "is_visible",
    }
)
