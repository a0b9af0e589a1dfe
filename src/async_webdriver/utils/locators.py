"""Element locator strategies."""

from dataclasses import dataclass
from typing import Callable


def _quote_css_string(value: str) -> str:
    """Quote a value for use inside a CSS attribute selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Selector:
    """A W3C locator: strategy name and selector value."""

    strategy: str
    value: str

    def to_json(self) -> dict:
        return {"using": self.strategy, "value": self.value}


class By:
    """
    Builders for the locator strategies the protocol understands.

    ``id``, ``name`` and ``class_name`` have no W3C strategy of their own and
    are rewritten as CSS attribute selectors.
    """

    @staticmethod
    def css(selector: str) -> Selector:
        return Selector("css selector", selector)

    @staticmethod
    def xpath(expression: str) -> Selector:
        return Selector("xpath", expression)

    @staticmethod
    def link_text(text: str) -> Selector:
        return Selector("link text", text)

    @staticmethod
    def partial_link_text(text: str) -> Selector:
        return Selector("partial link text", text)

    @staticmethod
    def tag_name(name: str) -> Selector:
        return Selector("tag name", name)

    @staticmethod
    def id(element_id: str) -> Selector:
        return Selector("css selector", f"[id={_quote_css_string(element_id)}]")

    @staticmethod
    def name(name: str) -> Selector:
        return Selector("css selector", f"[name={_quote_css_string(name)}]")

    @staticmethod
    def class_name(name: str) -> Selector:
        # ~= matches one whitespace-separated token, same as ".name"
        return Selector("css selector", f"[class~={_quote_css_string(name)}]")


# Map strategy names to By builders
STRATEGY_MAP: dict[str, Callable[[str], Selector]] = {
    "css": By.css,
    "xpath": By.xpath,
    "id": By.id,
    "name": By.name,
    "class": By.class_name,
    "tag": By.tag_name,
    "link_text": By.link_text,
    "partial_link_text": By.partial_link_text,
}


def get_by_strategy(strategy: str, value: str) -> Selector:
    """
    Build a Selector from a short strategy name.

    Args:
        strategy: Locator strategy name (css, xpath, id, name, class, tag, link_text)
        value: Selector value

    Returns:
        Selector for the protocol

    Raises:
        ValueError: If strategy is not supported
    """
    strategy = strategy.lower()
    if strategy not in STRATEGY_MAP:
        raise ValueError(
            f"Unsupported locator strategy: {strategy}. "
            f"Supported: {list(STRATEGY_MAP.keys())}"
        )
    return STRATEGY_MAP[strategy](value)
