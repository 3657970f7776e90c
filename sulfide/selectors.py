"""
Selector helpers.

Each helper turns a semantic lookup (by id, by text, ...) into the CSS or
XPath string that element handles accept. XPath is recognised by its
leading characters, so the output of any helper can be passed straight to
``S``/``SS`` or nested with ``find``.
"""

from __future__ import annotations

__all__ = [
    "is_xpath",
    "to_engine_selector",
    "xpath_literal",
    "by_css",
    "by_xpath",
    "by_id",
    "by_class_name",
    "by_attribute",
    "by_name",
    "by_title",
    "by_value",
    "by_text",
    "with_text",
]

XPATH_PREFIXES: tuple[str, ...] = ("/", "./", "..", "(")


def _require(value: str, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{what} must be a non-empty string")
    return value


def _css_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def xpath_literal(value: str) -> str:
    """Quote ``value`` as an XPath string literal."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


def is_xpath(selector: str) -> bool:
    return selector.strip().startswith(XPATH_PREFIXES)


def to_engine_selector(selector: str) -> str:
    """Selector string in the form Playwright's query methods expect."""
    selector = selector.strip()
    if is_xpath(selector):
        return f"xpath={selector}"
    return selector


def by_css(selector: str) -> str:
    return _require(selector, "CSS selector")


def by_xpath(xpath: str) -> str:
    xpath = _require(xpath, "XPath").strip()
    if not is_xpath(xpath):
        raise ValueError(f"XPath must start with one of {XPATH_PREFIXES}: {xpath}")
    return xpath


def by_id(element_id: str) -> str:
    return f"[id={_css_string(_require(element_id, 'id'))}]"


def by_class_name(class_name: str) -> str:
    class_name = _require(class_name, "class name").strip()
    if any(ch.isspace() for ch in class_name):
        raise ValueError(f"class name must not contain whitespace: {class_name!r}")
    return f".{class_name}"


def by_attribute(name: str, value: str | None = None) -> str:
    name = _require(name, "attribute name")
    if value is None:
        return f"[{name}]"
    return f"[{name}={_css_string(value)}]"


def by_name(name: str) -> str:
    return by_attribute("name", _require(name, "name"))


def by_title(title: str) -> str:
    return by_attribute("title", _require(title, "title"))


def by_value(value: str) -> str:
    return by_attribute("value", value)


def by_text(text: str) -> str:
    """Elements whose whitespace-normalised own text equals ``text``."""
    literal = xpath_literal(_require(text, "text").strip())
    return f".//*[normalize-space(text()) = {literal}]"


def with_text(text: str) -> str:
    """Elements whose own text contains ``text``."""
    literal = xpath_literal(_require(text, "text").strip())
    return f".//*[text()[contains(normalize-space(.), {literal})]]"


SELECTOR_HELPERS = {
    "by_css": by_css,
    "by_xpath": by_xpath,
    "by_id": by_id,
    "by_class_name": by_class_name,
    "by_attribute": by_attribute,
    "by_name": by_name,
    "by_title": by_title,
    "by_value": by_value,
    "by_text": by_text,
    "with_text": with_text,
}
