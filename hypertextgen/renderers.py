"""Code generators that turn parsed template nodes into C++ sources."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hypertextgen.nodes import DocumentNode
    from hypertextgen.parser import ProcedureNode


class GeneratedFileType(enum.Enum):
    """Kind of file produced by a renderer."""

    HEADER = "header"
    SOURCE = "source"


_INCLUDED_HEADERS = ("string", "iostream", "sstream")


def _includes(indent: str = "") -> str:
    return "".join(f"{indent}#include <{header}>\n" for header in _INCLUDED_HEADERS)


def _block(lines: Iterable[str], eol: str = "") -> str:
    return "".join(f"{line}{eol}\n" for line in lines)


def _definition(
    signature: str, body: Iterable[str], indent: str, body_indent: str, eol: str = ""
) -> str:
    lines = [indent + signature, indent + "{"]
    lines.extend(body_indent + line for line in body)
    lines.append(indent + "}")
    return _block(lines, eol)


@dataclass(frozen=True)
class _ApiMethod:
    """One of the render/print entry points of a generated template class."""

    name: str
    by_name: bool
    target: str | None = None

    @property
    def returns(self) -> str:
        return "std::string" if self.target is None else "void"

    @property
    def call(self) -> str:
        if self.by_name:
            return "renderer.renderHTMLPart(renderFuncName)"
        return "renderer.renderHTML()"

    def signature(
        self, cfg_type: str, *, prefix: str = "", suffix: str = "", named_cfg: bool = True
    ) -> str:
        params = []
        if self.by_name:
            params.append("const std::string& renderFuncName")
        params.append(f"const {cfg_type}& cfg" if named_cfg else f"const {cfg_type}&")
        if self.target == "stream":
            params.append("std::ostream& stream")
        return f"{self.returns} {prefix}{self.name}({', '.join(params)}) const{suffix}"

    def body(self, renderer_type: str, call: str | None = None) -> tuple[str, ...]:
        call = call or self.call
        if self.target is None:
            return (
                "auto stream  = std::stringstream{};",
                f"auto renderer = {renderer_type}{{cfg, stream}};",
                f"{call};",
                "return stream.str();",
            )
        return (f"auto renderer = {renderer_type}{{cfg, {self.target}}};", f"{call};")


_API = (
    _ApiMethod("render", by_name=False),
    _ApiMethod("render", by_name=True),
    _ApiMethod("print", by_name=False, target="std::cout"),
    _ApiMethod("print", by_name=True, target="std::cout"),
    _ApiMethod("print", by_name=False, target="stream"),
    _ApiMethod("print", by_name=True, target="stream"),
)


def _joined_code(nodes: Sequence[DocumentNode]) -> str:
    return "".join(node.rendering_code() for node in nodes)


def _global_statements_code(global_statements: Sequence[DocumentNode]) -> str:
    return "".join(statement.rendering_code() + "\n" for statement in global_statements)


def _procedure_invocations(procedures: Sequence[ProcedureNode]) -> str:
    return "".join(
        f'if (name == "{procedure.name}")\n    {procedure.name}();\n' for procedure in procedures
    )


class TranspilerRenderer(ABC):
    """Produces generated files from global statements, procedures and nodes."""

    @abstractmethod
    def generate_code(
        self,
        global_statements: Sequence[DocumentNode],
        procedures: Sequence[ProcedureNode],
        nodes: Sequence[DocumentNode],
    ) -> dict[GeneratedFileType, str]:
        """Return the text of every generated file, keyed by its type."""


def _single_header_call(method: _ApiMethod) -> str:
    # Stream-printing methods of the single header forward their arguments to renderHTML.
    if method.target != "stream":
        return method.call
    args = "renderFuncName, cfg, stream" if method.by_name else "cfg, stream"
    return f"renderer.renderHTML({args})"


def _single_header_public_api() -> str:
    methods = "".join(
        "    template<typename TCfg>\n"
        + _definition(
            method.signature("TCfg"),
            method.body("Renderer<TCfg>", _single_header_call(method)),
            " " * 4,
            " " * 8,
        )
        for method in _API
    )
    return "\npublic:\n" + methods + "};"


class SingleHeaderRenderer(TranspilerRenderer):
    """Generates one header holding a class template for any config type."""

    def __init__(self, class_name: str) -> None:
        self.class_name = class_name

    def generate_code(
        self,
        global_statements: Sequence[DocumentNode],
        procedures: Sequence[ProcedureNode],
        nodes: Sequence[DocumentNode],
    ) -> dict[GeneratedFileType, str]:
        parts = [
            "#pragma once\n",
            _includes(),
            _global_statements_code(global_statements),
            "\n",
            f"class {self.class_name}{{\n",
            "private:\n",
            "template<typename TCfg>\n",
            "class Renderer{\n",
            "const TCfg& cfg;\n",
            "std::ostream& out;\n",
        ]
        parts.extend(
            f"    std::string {procedure.name}() const{{\n"
            f"{procedure.rendering_code()}\nreturn {{}};\n}}\n"
            for procedure in procedures
        )
        parts += [
            "\npublic:\n",
            "    Renderer(const TCfg& cfg, std::ostream& out)\n",
            "        : cfg(cfg), out(out)\n",
            "    {}\n",
            "    void renderHTML() const\n",
            "    {\n    ",
            _joined_code(nodes),
            "    }\n",
            "\n    void renderHTMLPart(const std::string& name) const\n",
            "    {\n",
            "        static_cast<void>(name);\n    ",
            _procedure_invocations(procedures),
            "    }\n",
            "};\n",
            _single_header_public_api(),
        ]
        return {GeneratedFileType.HEADER: "".join(parts)}


_EXPORT_MACRO = (
    "    #ifdef _WIN32",
    "      #ifdef HYPERTEXTCPP_EXPORT",
    "        #define HYPERTEXTCPP_API __declspec(dllexport)",
    "      #else",
    "        #define HYPERTEXTCPP_API __declspec(dllimport)",
    "      #endif",
    "    #else",
    "      #define HYPERTEXTCPP_API",
    "    #endif",
)

_CONFIG_MACRO_HEAD = (
    "    #define HTCPP_CONFIG(TCfg) using Cfg = TCfg;",
    "    namespace {",
    "    struct Template : public htcpp::ITemplate<Cfg>{",
    "        class Renderer{",
    "            const Cfg& cfg;",
    "            std::ostream& out;",
    "        public:",
    "            Renderer(const Cfg& cfg, std::ostream& out)",
    "                : cfg(cfg), out(out)",
    "            {}",
)

_EXPORTED_FUNCTIONS = (
    ("htcpp::ITemplate<TCfg>* makeTemplate()", "return new Template;"),
    ("void deleteTemplate(htcpp::ITemplate<TCfg>* ptr)", "delete ptr;"),
)


def _shared_lib_preamble() -> str:
    interface = [
        "    namespace htcpp{",
        "    template <typename TCfg>",
        "    class ITemplate{",
        "    public:",
        "        virtual ~ITemplate() = default;",
    ]
    interface.extend(
        "        virtual "
        + method.signature("TCfg", suffix=" = 0", named_cfg=method.target == "stream")
        + ";"
        for method in _API
    )
    interface += ["    };", "    }"]
    return (
        "\n"
        + _includes(" " * 4)
        + "\n"
        + _block(_EXPORT_MACRO)
        + "\n"
        + _block(interface)
        + _block(_CONFIG_MACRO_HEAD, "\\")
    )


def _shared_lib_macro_tail() -> str:
    head = _block(
        [
            "",
            "            void renderHTML() const;",
            "            void renderHTMLPart(const std::string& name) const;",
            "        };",
            "        ",
        ],
        "\\",
    )
    methods = []
    for index, method in enumerate(_API):
        if index and index % 2 == 0:
            methods.append("    \\\n")
        methods.append(
            _definition(
                method.signature("Cfg", suffix=" override"),
                method.body("Renderer"),
                " " * 8,
                " " * 12,
                "\\",
            )
        )
    closing = ["    };", "    }"]
    for signature, statement in _EXPORTED_FUNCTIONS:
        closing += [
            "    ",
            '    extern "C" ',
            f"    HYPERTEXTCPP_API {signature}",
            "    {",
            f"        {statement}",
            "    }",
        ]
    return head + "".join(methods) + _block(closing, "\\") + "\n    "


class SharedLibRenderer(TranspilerRenderer):
    """Generates the source of a shared library exporting the template."""

    def generate_code(
        self,
        global_statements: Sequence[DocumentNode],
        procedures: Sequence[ProcedureNode],
        nodes: Sequence[DocumentNode],
    ) -> dict[GeneratedFileType, str]:
        parts = [_shared_lib_preamble()]
        parts.extend(
            f"            std::string {procedure.name}() const;\\\n" for procedure in procedures
        )
        parts += [
            _shared_lib_macro_tail(),
            _global_statements_code(global_statements),
            "namespace {\n",
        ]
        parts.extend(
            f"std::string Template::Renderer::{procedure.name}() const{{\n"
            f"{procedure.rendering_code()}\n return {{}};}}\n"
            for procedure in procedures
        )
        parts += [
            "void Template::Renderer::renderHTML() const\n{\n",
            _joined_code(nodes),
            "\n}\n",
            "void Template::Renderer::renderHTMLPart(const std::string& name) const\n{\n",
            "static_cast<void>(name);\n",
            _procedure_invocations(procedures),
            "\n}\n",
            "}",
        ]
        return {GeneratedFileType.SOURCE: "".join(parts)}


class HeaderAndSourceRenderer(TranspilerRenderer):
    """Generates a header and a source file for a fixed config type."""

    def __init__(self, class_name: str, header_file_name: str, config_type_name: str) -> None:
        self.class_name = class_name
        self.header_file_name = header_file_name
        self.config_type_name = config_type_name

    def _header(
        self,
        global_statements: Sequence[DocumentNode],
        procedures: Sequence[ProcedureNode],
    ) -> str:
        cls = self.class_name
        cfg = self.config_type_name
        declarations = "".join(
            f"    std::string {procedure.name}() const;\n" for procedure in procedures
        )
        api = "".join(f"    {method.signature(cfg)};\n" for method in _API)
        return (
            "\n#pragma once\n"
            + _includes()
            + "\n"
            + f"{_global_statements_code(global_statements)}\n\n"
            f"class {cls} {{\n"
            "private:\n"
            "class Renderer{\n"
            f"    const {cfg}& cfg;\n"
            "    std::ostream& out;\n"
            f"    {declarations}\n\n"
            "public:\n"
            f"    Renderer(const {cfg}& cfg, std::ostream& out);\n"
            "    void renderHTML() const;\n"
            "    void renderHTMLPart(const std::string& name) const;\n"
            "};\n"
            "public:\n" + api + "};"
        )

    def _source(self, procedures: Sequence[ProcedureNode], nodes: Sequence[DocumentNode]) -> str:
        cls = self.class_name
        cfg = self.config_type_name
        implementations = "".join(
            f"std::string {cls}::Renderer::{procedure.name}() const{{\n"
            f"{procedure.rendering_code()}\n return {{}};\n}}\n"
            for procedure in procedures
        )
        definitions = "\n".join(
            _definition(
                method.signature(cfg, prefix=f"{cls}::"),
                method.body("Renderer"),
                "",
                " " * (8 if index == 0 else 4),
            )
            for index, method in enumerate(_API)
        )
        return (
            f'\n#include "{self.header_file_name}"\n\n{implementations}\n\n'
            f"{cls}::Renderer::Renderer(const {cfg}& cfg, std::ostream& out)\n"
            "        : cfg(cfg), out(out)\n{}\n\n"
            f"void {cls}::Renderer::renderHTML() const\n{{\n{_joined_code(nodes)}\n}}\n\n"
            f"void {cls}::Renderer::renderHTMLPart(const std::string& name) const\n{{\n"
            f"    static_cast<void>(name);\n{_procedure_invocations(procedures)}\n}}\n\n"
            + definitions
        )

    def generate_code(
        self,
        global_statements: Sequence[DocumentNode],
        procedures: Sequence[ProcedureNode],
        nodes: Sequence[DocumentNode],
    ) -> dict[GeneratedFileType, str]:
        return {
            GeneratedFileType.HEADER: self._header(global_statements, procedures),
            GeneratedFileType.SOURCE: self._source(procedures, nodes),
        }