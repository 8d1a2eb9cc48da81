"""Conditional and loop extensions attached to template nodes."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from hypertextgen.errors import TemplateError
from hypertextgen.streamreader import StreamReader
from hypertextgen.utils import is_blank


class NodeExtensionType(enum.Enum):
    """Kind of control flow an extension wraps its node in."""

    CONDITIONAL = "Conditional extension"
    LOOP = "Loop extension"

    @property
    def display_name(self) -> str:
        return self.value


_OPENERS = {
    "?(": NodeExtensionType.CONDITIONAL,
    "@(": NodeExtensionType.LOOP,
}


@dataclass(frozen=True)
class NodeExtension:
    """An extension's kind and its code (condition or loop header)."""

    type: NodeExtensionType
    content: str


def read_node_extension(stream: StreamReader) -> NodeExtension | None:
    """Read an extension such as ``?(cond)`` or ``@(loop)`` if one comes next."""
    node_pos = stream.position()
    extension_type = _OPENERS.get(stream.peek(2))
    if extension_type is None:
        return None

    stream.skip(2)
    depth = 1
    content: list[str] = []
    while not stream.at_end():
        ch = stream.read()
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                text = "".join(content)
                if is_blank(text):
                    raise TemplateError(node_pos, f"{extension_type.display_name} can't be empty")
                return NodeExtension(extension_type, text)
        content.append(ch)
    raise TemplateError(node_pos, f"{extension_type.display_name} isn't closed with ')'")