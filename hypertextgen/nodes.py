"""Document nodes: plain text, embedded code and control flow statements."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod

from hypertextgen.errors import TemplateError
from hypertextgen.nodeextension import NodeExtension, NodeExtensionType, read_node_extension
from hypertextgen.streamreader import Position, StreamReader
from hypertextgen.utils import RAW_STRING_CLOSE, RAW_STRING_OPEN, is_blank, transform_raw_strings

_STRING_QUOTES = frozenset({"'", "`", '"'})


def _open_control_flow(extension: NodeExtension) -> str:
    if extension.type is NodeExtensionType.CONDITIONAL:
        return f"if ({extension.content}){{ "
    return f"for ({extension.content}){{ "


_CLOSE_CONTROL_FLOW = " } "


class DocumentNode(ABC):
    """Base class of every node a template is parsed into.

    Nodes that produce code define ``rendering_code()``; nodes that hold
    other nodes derive from :class:`NodeCollection`.
    """


class NodeCollection(DocumentNode):
    """A node made of other nodes, expanded before code generation."""

    @abstractmethod
    def flatten(self) -> list[DocumentNode]:
        """Return the contained nodes as a flat list of rendering nodes."""


class TextNode(DocumentNode):
    """Literal text written to the output unchanged."""

    def __init__(self, content: str) -> None:
        self.content = content

    def rendering_code(self) -> str:
        """Code that writes the text to the output stream."""
        return f"out << {RAW_STRING_OPEN}{self.content}{RAW_STRING_CLOSE};"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextNode):
            return NotImplemented
        return self.content == other.content

    def __repr__(self) -> str:
        return f"TextNode({self.content!r})"


class ControlFlowType(enum.Enum):
    """Whether a control flow statement opens or closes a block."""

    OPEN = "open"
    CLOSE = "close"


class ControlFlowStatementNode(DocumentNode):
    """Opening or closing of the block generated for a node extension."""

    def __init__(self, kind: ControlFlowType, extension: NodeExtension) -> None:
        self.kind = kind
        self.extension = extension

    def rendering_code(self) -> str:
        """The block header for an opening node, the closing brace otherwise."""
        if self.kind is ControlFlowType.OPEN:
            return _open_control_flow(self.extension)
        return _CLOSE_CONTROL_FLOW


class CodeNode:
    """Code enclosed by an id token and a pair of brackets, e.g. ``$( ... )``."""

    def __init__(
        self,
        node_type_name: str,
        id_token: str,
        open_token: str,
        close_token: str,
        stream: StreamReader,
    ) -> None:
        self.node_type_name = node_type_name
        self.id_token = id_token
        self.open_token = open_token
        self.close_token = close_token
        self.content = ""
        self.extension: NodeExtension | None = None
        self._load(stream)

    def _load(self, stream: StreamReader) -> None:
        node_pos = stream.position()
        open_seq = stream.read(2)
        if open_seq != self.id_token + self.open_token:
            raise ValueError(
                f"{self.node_type_name} must start with '{self.id_token}{self.open_token}'"
            )
        self.extension = read_node_extension(stream)

        depth = 1
        inside_string = ""
        last_string_pos = Position()
        parts: list[str] = []
        while not stream.at_end():
            ch = stream.read()
            if not inside_string:
                if ch in _STRING_QUOTES:
                    inside_string = ch
                last_string_pos = stream.position()
            elif ch == inside_string:
                inside_string = ""
                last_string_pos = stream.position()

            if not inside_string:
                if ch == self.open_token:
                    depth += 1
                elif ch == self.close_token:
                    depth -= 1
                    if depth == 0:
                        self._finish(stream, node_pos, "".join(parts))
                        return
            parts.append(ch)

        if inside_string:
            if inside_string != "'":
                raise TemplateError(
                    last_string_pos, f"String isn't closed with '{inside_string}'"
                )
            raise TemplateError(last_string_pos, "Char literal isn't closed with \"'\"")
        raise TemplateError(
            node_pos, f"{self.node_type_name} isn't closed with '{self.close_token}'"
        )

    def _finish(self, stream: StreamReader, node_pos: Position, content: str) -> None:
        extension_pos = stream.position()
        closing_extension = read_node_extension(stream)
        if closing_extension is not None:
            if self.extension is not None:
                raise TemplateError(
                    extension_pos, f"{self.node_type_name} can't have multiple extensions"
                )
            self.extension = closing_extension
        if is_blank(content):
            raise TemplateError(node_pos, f"{self.node_type_name} can't be empty")
        self.content = transform_raw_strings(content, node_pos)


class ExpressionNode(DocumentNode):
    """``$( expr )``: an expression whose value is written to the output."""

    def __init__(self, stream: StreamReader) -> None:
        self._code = CodeNode("Expression", "$", "(", ")", stream)

    def rendering_code(self) -> str:
        """Code writing the expression, wrapped in its extension's block if any."""
        extension = self._code.extension
        body = f"out << ({self._code.content});"
        if extension is None:
            return body
        return _open_control_flow(extension) + body + _CLOSE_CONTROL_FLOW


class StatementNode(DocumentNode):
    """``${ code }``: statements inserted into the rendering function."""

    def __init__(self, stream: StreamReader) -> None:
        self._code = CodeNode("Statement", "$", "{", "}", stream)

    def rendering_code(self) -> str:
        """The statements as written."""
        return self._code.content


class GlobalStatementNode(DocumentNode):
    """``#{ code }``: statements placed at file scope of the generated code."""

    def __init__(self, stream: StreamReader) -> None:
        self._code = CodeNode("Global statement", "#", "{", "}", stream)

    def rendering_code(self) -> str:
        """The statements as written."""
        return self._code.content