import pytest

from hypertextgen.nodes import GlobalStatementNode, TextNode
from hypertextgen.parser import read_procedure
from hypertextgen.renderers import (
    GeneratedFileType,
    HeaderAndSourceRenderer,
    SharedLibRenderer,
    SingleHeaderRenderer,
    TranspilerRenderer,
)
from hypertextgen.streamreader import StreamReader


def _global_statement(code):
    return GlobalStatementNode(StreamReader(code))


def _procedure(code):
    return read_procedure(StreamReader(code))


@pytest.fixture
def parts():
    global_statements = [_global_statement("#{ #include <vector> }")]
    procedures = [_procedure("#taskList(){<p>tasks</p>}")]
    nodes = [TextNode("<h1>Hello</h1>")]
    return global_statements, procedures, nodes


TEXT_CODE = 'out << R"_htcpp_str_(<h1>Hello</h1>)_htcpp_str_";'
PROC_CODE = 'out << R"_htcpp_str_(<p>tasks</p>)_htcpp_str_";'


def test_renderer_is_abstract():
    with pytest.raises(TypeError):
        TranspilerRenderer()


def test_single_header_produces_only_header(parts):
    result = SingleHeaderRenderer("TodoList").generate_code(*parts)
    assert set(result) == {GeneratedFileType.HEADER}


def test_single_header_layout(parts):
    code = SingleHeaderRenderer("TodoList").generate_code(*parts)[GeneratedFileType.HEADER]
    assert code.startswith("#pragma once\n#include <string>\n#include <iostream>\n#include <sstream>\n")
    assert " #include <vector> \n\nclass TodoList{\n" in code
    assert "    std::string taskList() const{\n" + PROC_CODE + "\nreturn {};\n}\n" in code
    assert TEXT_CODE + "    }\n" in code
    assert 'if (name == "taskList")\n    taskList();\n' in code
    assert code.endswith("};")


def test_single_header_without_procedures_or_globals():
    code = SingleHeaderRenderer("Page").generate_code([], [], [])[GeneratedFileType.HEADER]
    assert "#include <sstream>\n\nclass Page{\n" in code
    assert "if (name ==" not in code


def test_single_header_node_order():
    nodes = [TextNode("first"), TextNode("second")]
    code = SingleHeaderRenderer("Page").generate_code([], [], nodes)[GeneratedFileType.HEADER]
    assert code.index("(first)") < code.index("(second)")


def test_shared_lib_produces_only_source(parts):
    result = SharedLibRenderer().generate_code(*parts)
    assert set(result) == {GeneratedFileType.SOURCE}


def test_shared_lib_layout(parts):
    code = SharedLibRenderer().generate_code(*parts)[GeneratedFileType.SOURCE]
    assert "#define HTCPP_CONFIG(TCfg) using Cfg = TCfg;\\\n" in code
    assert "            {}\\\n            std::string taskList() const;\\\n\\\n" in code
    assert 'extern "C" \\\n' in code
    assert " #include <vector> \nnamespace {\n" in code
    assert "std::string Template::Renderer::taskList() const{\n" + PROC_CODE + "\n return {};}\n" in code
    assert "void Template::Renderer::renderHTML() const\n{\n" + TEXT_CODE + "\n}\n" in code
    assert 'static_cast<void>(name);\nif (name == "taskList")\n    taskList();\n\n}\n}' in code
    assert code.endswith("}")


def test_shared_lib_without_procedures():
    code = SharedLibRenderer().generate_code([], [], [])[GeneratedFileType.SOURCE]
    assert "            {}\\\n\\\n            void renderHTML() const;\\\n" in code
    assert "Template::Renderer::renderHTML() const\n{\n\n}\n" in code


def test_header_and_source_produces_both(parts):
    result = HeaderAndSourceRenderer("TodoList", "todolist.h", "PageParams").generate_code(*parts)
    assert set(result) == {GeneratedFileType.HEADER, GeneratedFileType.SOURCE}


def test_header_and_source_header(parts):
    result = HeaderAndSourceRenderer("TodoList", "todolist.h", "PageParams").generate_code(*parts)
    header = result[GeneratedFileType.HEADER]
    assert header.startswith("\n#pragma once\n")
    assert "class TodoList {\n" in header
    assert "    const PageParams& cfg;\n" in header
    assert "    std::string taskList() const;\n" in header
    assert "    std::string render(const PageParams& cfg) const;\n" in header
    assert " #include <vector> \n" in header
    assert header.endswith("};")


def test_header_and_source_source(parts):
    result = HeaderAndSourceRenderer("TodoList", "todolist.h", "PageParams").generate_code(*parts)
    source = result[GeneratedFileType.SOURCE]
    assert source.startswith('\n#include "todolist.h"\n')
    assert "std::string TodoList::Renderer::taskList() const{\n" + PROC_CODE + "\n return {};\n}\n" in source
    assert "void TodoList::Renderer::renderHTML() const\n{\n" + TEXT_CODE + "\n}\n" in source
    assert 'if (name == "taskList")\n    taskList();\n' in source
    assert "auto stream  = std::stringstream{};" in source
    assert "TodoList::Renderer::Renderer(const PageParams& cfg, std::ostream& out)" in source
    assert "#include <vector>" not in source


def test_header_and_source_empty_template():
    result = HeaderAndSourceRenderer("Page", "page.h", "Cfg").generate_code([], [], [])
    source = result[GeneratedFileType.SOURCE]
    assert "void Page::Renderer::renderHTML() const\n{\n\n}\n" in source
    assert "if (name ==" not in source
    assert "class Page {{" not in result[GeneratedFileType.HEADER]
    assert "class Page {\n" in result[GeneratedFileType.HEADER]