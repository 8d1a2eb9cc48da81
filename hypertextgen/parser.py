"""Tags, sections and procedures, and readers that pick the right node."""

from __future__ import annotations

import enum

from hypertextgen.errors import TemplateError
from hypertextgen.nodeextension import NodeExtension, read_node_extension
from hypertextgen.nodes import (
    ControlFlowStatementNode,
    ControlFlowType,
    DocumentNode,
    ExpressionNode,
    GlobalStatementNode,
    NodeCollection,
    StatementNode,
    TextNode,
)
from hypertextgen.streamreader import Position, StreamReader
from hypertextgen.utils import is_blank, is_tag_empty_element, trim_blank_lines

_WHITESPACE = frozenset(" \t\n\v\f\r")


def _flatten_into(result: list[DocumentNode], nodes: list[DocumentNode]) -> None:
    for node in nodes:
        if isinstance(node, NodeCollection):
            result.extend(node.flatten())
        else:
            result.append(node)


def _wrap_with_extension(
    nodes: list[DocumentNode], extension: NodeExtension | None
) -> list[DocumentNode]:
    if extension is None:
        return nodes
    return [
        ControlFlowStatementNode(ControlFlowType.OPEN, extension),
        *nodes,
        ControlFlowStatementNode(ControlFlowType.CLOSE, extension),
    ]


def _read_closing_extension(
    stream: StreamReader, current: NodeExtension | None, node_name: str
) -> NodeExtension | None:
    extension_pos = stream.position()
    closing = read_node_extension(stream)
    if closing is None:
        return current
    if current is not None:
        raise TemplateError(extension_pos, f"{node_name} can't have multiple extensions")
    return closing


def consume_read_text(
    text: str, nodes: list[DocumentNode], new_node: DocumentNode | None = None
) -> None:
    """Append accumulated text to ``nodes`` as a text node.

    Text next to a tag is kept as it is; elsewhere a leading line break and a
    trailing blank line are dropped, and text left blank is not added.
    """
    if not text:
        return
    if not nodes or type(nodes[-1]) is TagNode or type(new_node) is TagNode:
        nodes.append(TextNode(text))
        return
    text = trim_blank_lines(text)
    if text:
        nodes.append(TextNode(text))


def consume_read_attributes_text(text: str, nodes: list[DocumentNode]) -> None:
    """Append accumulated tag attribute text to ``nodes``, trimming blank lines."""
    if not text:
        return
    text = trim_blank_lines(text)
    if text:
        nodes.append(TextNode(text))


class _ReadResult(enum.Enum):
    OK = enum.auto()
    COMPLETED = enum.auto()


class TagNode(NodeCollection):
    """An HTML tag with its attributes and content."""

    def __init__(self, stream: StreamReader) -> None:
        self.name = ""
        self.attribute_nodes: list[DocumentNode] = []
        self.content_nodes: list[DocumentNode] = []
        self.extension: NodeExtension | None = None
        self._read_text = ""
        self._attributes_read = False
        self._load(stream)

    def _load(self, stream: StreamReader) -> None:
        node_pos = stream.position()
        if stream.read() != "<":
            raise ValueError("Tag must start with '<'")

        while not stream.at_end():
            if not self.name:
                if self._read_name(stream, node_pos) is _ReadResult.COMPLETED:
                    return
                continue
            if not self._attributes_read:
                if self._read_attributes(stream) is _ReadResult.COMPLETED:
                    return
                continue
            closing_tag = f"</{self.name}>"
            if stream.peek(len(closing_tag)) == closing_tag:
                consume_read_text(self._read_text, self.content_nodes)
                self._read_text = ""
                stream.skip(len(closing_tag))
                self.extension = _read_closing_extension(stream, self.extension, "Tag")
                return
            node = read_tag_content_node(stream)
            if node is not None:
                consume_read_text(self._read_text, self.content_nodes, node)
                self._read_text = ""
                self.content_nodes.append(node)
            else:
                self._read_text += stream.read()

        if not self.name:
            raise TemplateError(node_pos, "Tag's name can't be empty")
        if self._attributes_read:
            raise TemplateError(node_pos, f"Tag isn't closed with </{self.name}>")
        raise TemplateError(node_pos, "Tag isn't closed with '>'")

    def _take_name(self, node_pos: Position) -> None:
        if is_blank(self._read_text):
            raise TemplateError(node_pos, "Tag's name can't be empty")
        self.name = self._read_text
        self._read_text = ""

    def _finish_opening_tag(self, stream: StreamReader) -> _ReadResult:
        self._attributes_read = True
        stream.skip(1)
        self.extension = read_node_extension(stream)
        if is_tag_empty_element(self.name):
            return _ReadResult.COMPLETED
        return _ReadResult.OK

    def _read_name(self, stream: StreamReader, node_pos: Position) -> _ReadResult:
        next_char = stream.peek()
        if next_char in _WHITESPACE:
            self._take_name(node_pos)
        elif next_char == ">":
            self._take_name(node_pos)
            return self._finish_opening_tag(stream)
        else:
            self._read_text += stream.read()
        return _ReadResult.OK

    def _read_attributes(self, stream: StreamReader) -> _ReadResult:
        if stream.peek() == ">":
            consume_read_attributes_text(self._read_text, self.attribute_nodes)
            self._read_text = ""
            return self._finish_opening_tag(stream)

        node = read_tag_attribute_node(stream)
        if node is not None:
            consume_read_attributes_text(self._read_text, self.attribute_nodes)
            self._read_text = ""
            self.attribute_nodes.append(node)
        else:
            self._read_text += stream.read()
        return _ReadResult.OK

    def flatten(self) -> list[DocumentNode]:
        """The tag as text nodes around its flattened attributes and content."""
        result: list[DocumentNode] = [TextNode("<" + self.name)]
        _flatten_into(result, self.attribute_nodes)
        result.append(TextNode(">"))
        _flatten_into(result, self.content_nodes)
        if not is_tag_empty_element(self.name):
            result.append(TextNode(f"</{self.name}>"))
        return _wrap_with_extension(result, self.extension)


class SectionNode(NodeCollection):
    """``[[ ... ]]``: a group of nodes that may carry an extension."""

    def __init__(self, stream: StreamReader) -> None:
        self.content_nodes: list[DocumentNode] = []
        self.extension: NodeExtension | None = None
        self._load(stream)

    def _load(self, stream: StreamReader) -> None:
        node_pos = stream.position()
        if stream.read(2) != "[[":
            raise ValueError("Section must start with '[['")
        self.extension = read_node_extension(stream)

        read_text = ""
        while not stream.at_end():
            if stream.peek(2) == "]]":
                stream.skip(2)
                consume_read_text(read_text, self.content_nodes)
                self.extension = _read_closing_extension(stream, self.extension, "Section")
                if not self.content_nodes:
                    raise TemplateError(node_pos, "Section can't be empty")
                return
            node = read_non_tag_node(stream)
            if node is not None:
                consume_read_text(read_text, self.content_nodes, node)
                read_text = ""
                self.content_nodes.append(node)
            else:
                read_text += stream.read()
        raise TemplateError(node_pos, "Section isn't closed with ']]'")

    def flatten(self) -> list[DocumentNode]:
        """The flattened content, wrapped in the extension's block if any."""
        result: list[DocumentNode] = []
        _flatten_into(result, self.content_nodes)
        return _wrap_with_extension(result, self.extension)


class ProcedureNode(DocumentNode):
    """``#name(){ ... }``: a named part of the template rendered on its own."""

    def __init__(self, name: str, stream: StreamReader) -> None:
        if not name:
            raise ValueError("Procedure name can't be empty")
        self.name = name
        self.content_nodes: list[DocumentNode] = []
        self._load(stream)

    def _load(self, stream: StreamReader) -> None:
        node_pos = stream.position()
        open_seq = f"#{self.name}(){{"
        if stream.read(len(open_seq)) != open_seq:
            raise ValueError(f"Procedure must start with '{open_seq}'")

        read_text = ""
        nodes: list[DocumentNode] = []
        while not stream.at_end():
            if stream.peek() == "}":
                stream.skip(1)
                consume_read_text(read_text, nodes)
                self.content_nodes = optimize_nodes(flatten_nodes(nodes))
                return
            node = read_non_tag_node(stream)
            if node is not None:
                consume_read_text(read_text, nodes, node)
                read_text = ""
                nodes.append(node)
            else:
                read_text += stream.read()
        raise TemplateError(node_pos, "Procedure isn't closed with '}'")

    def rendering_code(self) -> str:
        """Code rendering the procedure's content."""
        return "".join(node.rendering_code() for node in self.content_nodes)


def _read_common_node(stream: StreamReader) -> DocumentNode | None:
    if stream.at_end():
        return None
    opener = stream.peek(2)
    if opener == "[[":
        return SectionNode(stream)
    if opener == "$(":
        return ExpressionNode(stream)
    if opener == "${":
        return StatementNode(stream)
    return None


def read_tag_attribute_node(stream: StreamReader) -> DocumentNode | None:
    """Read a section, expression or statement inside a tag's attributes."""
    return _read_common_node(stream)


def read_tag_content_node(stream: StreamReader) -> DocumentNode | None:
    """Read a nested tag or a common node inside a tag's content."""
    if stream.at_end():
        return None
    if stream.peek(2) != "</" and stream.peek() == "<":
        return TagNode(stream)
    return _read_common_node(stream)


def read_non_tag_node(stream: StreamReader) -> DocumentNode | None:
    """Read a tag or a common node outside a tag."""
    if stream.at_end():
        return None
    if stream.peek() == "<":
        return TagNode(stream)
    return _read_common_node(stream)


def read_global_statement(stream: StreamReader) -> GlobalStatementNode | None:
    """Read a ``#{ ... }`` global statement if one comes next."""
    if stream.at_end():
        return None
    if stream.peek(2) == "#{":
        return GlobalStatementNode(stream)
    return None


def read_procedure(stream: StreamReader) -> ProcedureNode | None:
    """Read a ``#name(){ ... }`` procedure if one comes next."""
    if stream.at_end() or stream.peek() != "#":
        return None
    size = 2
    while True:
        text = stream.peek(size)
        if not text or text[-1] in _WHITESPACE:
            return None
        if text[-1] == "(":
            name = text[1:-1]
            if name and stream.peek(len(name) + 4) == f"#{name}(){{":
                return ProcedureNode(name, stream)
        size += 1


def flatten_nodes(nodes: list[DocumentNode]) -> list[DocumentNode]:
    """Expand every node collection into the nodes it holds."""
    result: list[DocumentNode] = []
    _flatten_into(result, nodes)
    return result


def optimize_nodes(nodes: list[DocumentNode]) -> list[DocumentNode]:
    """Merge adjacent text nodes into one."""
    result: list[DocumentNode] = []
    for node in nodes:
        if isinstance(node, TextNode):
            if result and isinstance(result[-1], TextNode):
                result[-1] = TextNode(result[-1].content + node.content)
            else:
                result.append(TextNode(node.content))
        else:
            result.append(node)
    return result