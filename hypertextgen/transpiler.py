"""Parses a template file and hands its nodes to a code renderer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from hypertextgen.errors import ParsingError
from hypertextgen.nodes import DocumentNode, GlobalStatementNode
from hypertextgen.parser import (
    ProcedureNode,
    consume_read_text,
    flatten_nodes,
    optimize_nodes,
    read_global_statement,
    read_non_tag_node,
    read_procedure,
)
from hypertextgen.renderers import GeneratedFileType, TranspilerRenderer
from hypertextgen.streamreader import StreamReader


@dataclass
class _ParsedTemplate:
    nodes: list[DocumentNode] = field(default_factory=list)
    global_statements: list[GlobalStatementNode] = field(default_factory=list)
    procedures: list[ProcedureNode] = field(default_factory=list)


def _parse(text: str) -> _ParsedTemplate:
    stream = StreamReader(text)
    parsed = _ParsedTemplate()
    read_text = ""
    while not stream.at_end():
        node = read_non_tag_node(stream)
        if node is not None:
            consume_read_text(read_text, parsed.nodes, node)
            read_text = ""
            parsed.nodes.append(node)
            continue
        statement = read_global_statement(stream)
        if statement is not None:
            consume_read_text(read_text, parsed.nodes)
            read_text = ""
            parsed.global_statements.append(statement)
            continue
        procedure = read_procedure(stream)
        if procedure is not None:
            consume_read_text(read_text, parsed.nodes)
            read_text = ""
            parsed.procedures.append(procedure)
            continue
        read_text += stream.read()
    consume_read_text(read_text, parsed.nodes)
    return parsed


class Transpiler:
    """Turns template files into generated code with the given renderer."""

    def __init__(self, renderer: TranspilerRenderer) -> None:
        self.renderer = renderer

    def process(self, file_path: str | os.PathLike[str]) -> dict[GeneratedFileType, str]:
        """Parse the template at ``file_path`` and return the generated files."""
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ParsingError(f"Can't open file {path}") from exc
        parsed = _parse(data.decode("utf-8", errors="surrogateescape"))
        return self.renderer.generate_code(
            parsed.global_statements,
            parsed.procedures,
            optimize_nodes(flatten_nodes(parsed.nodes)),
        )