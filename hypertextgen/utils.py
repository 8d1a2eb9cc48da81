"""Text helpers shared by the template parser."""

from __future__ import annotations

from hypertextgen.errors import TemplateError
from hypertextgen.streamreader import Position, StreamReader

_WHITESPACE = frozenset(" \t\n\v\f\r")

_EMPTY_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

RAW_STRING_OPEN = 'R"_htcpp_str_('
RAW_STRING_CLOSE = ')_htcpp_str_"'


def _is_space(ch: str) -> bool:
    return ch in _WHITESPACE


def is_tag_empty_element(tag_name: str) -> bool:
    """Whether an HTML tag has no closing tag (void elements and '!' declarations)."""
    return tag_name in _EMPTY_ELEMENTS or tag_name.startswith("!")


def is_blank(text: str) -> bool:
    """Whether the text is empty or whitespace only."""
    return all(_is_space(ch) for ch in text)


def transform_raw_strings(code: str, position: Position) -> str:
    """Replace backtick-quoted strings in code with raw string literals."""
    stream = StreamReader(code, position)
    parts: list[str] = []
    inside_string = False
    raw_string_pos = Position()
    while not stream.at_end():
        ch = stream.read()
        if ch == "`":
            if not inside_string:
                raw_string_pos = stream.position()
                parts.append(RAW_STRING_OPEN)
            else:
                parts.append(RAW_STRING_CLOSE)
            inside_string = not inside_string
        else:
            parts.append(ch)
    if inside_string:
        raise TemplateError(raw_string_pos, "String is unclosed")
    return "".join(parts)


def _trim_front_new_line(text: str) -> str:
    if text.startswith("\n") or text.startswith("\r\n"):
        return text.lstrip(" \t\n\v\f\r")
    return text


def _trim_last_blank_line_from(text: str, new_line_pos: int) -> str:
    if new_line_pos == -1:
        return text
    if new_line_pos > 0 and _is_space(text[new_line_pos - 1]):
        return text
    if is_blank(text[new_line_pos:]):
        return text[:new_line_pos]
    return text


def _trim_last_blank_line(text: str) -> str:
    text = _trim_last_blank_line_from(text, text.rfind("\n"))
    return _trim_last_blank_line_from(text, text.rfind("\r\n"))


def trim_blank_lines(text: str) -> str:
    """Drop a leading line break with its whitespace and a trailing blank line."""
    return _trim_last_blank_line(_trim_front_new_line(text))