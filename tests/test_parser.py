import pytest

from hypertextgen.errors import TemplateError
from hypertextgen.nodes import ExpressionNode, TextNode
from hypertextgen.parser import (
    ProcedureNode,
    SectionNode,
    TagNode,
    consume_read_attributes_text,
    consume_read_text,
    flatten_nodes,
    optimize_nodes,
    read_global_statement,
    read_non_tag_node,
    read_procedure,
    read_tag_attribute_node,
    read_tag_content_node,
)
from hypertextgen.streamreader import StreamReader


def _render(nodes):
    return "".join(node.rendering_code() for node in optimize_nodes(nodes))


def _render_section(text):
    return _render(SectionNode(StreamReader(text)).flatten())


def _render_tag(text):
    return _render(TagNode(StreamReader(text)).flatten())


@pytest.mark.parametrize(
    "source, expected",
    [
        ("[[ Hello world! ]]", 'out << R"_htcpp_str_( Hello world! )_htcpp_str_";'),
        (
            "[[?(isVisible) Hello world! ]]",
            'if (isVisible){ out << R"_htcpp_str_( Hello world! )_htcpp_str_"; } ',
        ),
        (
            "[[@(auto i = 0; i < 5; ++i) Hello world! ]]",
            'for (auto i = 0; i < 5; ++i){ out << R"_htcpp_str_( Hello world! )_htcpp_str_"; } ',
        ),
        (
            "[[ Hello world! ]]?(isVisible)",
            'if (isVisible){ out << R"_htcpp_str_( Hello world! )_htcpp_str_"; } ',
        ),
        (
            "[[ Hello world! ]]@(auto i = 0; i < 5; ++i)",
            'for (auto i = 0; i < 5; ++i){ out << R"_htcpp_str_( Hello world! )_htcpp_str_"; } ',
        ),
        (
            "[[ Hello <p>world</p> [[!]] ]]",
            'out << R"_htcpp_str_( Hello <p>world</p> ! )_htcpp_str_";',
        ),
        (
            "[[ Hello <p>?(isVisible)world</p> [[!]]?(isVisible) ]]?(isVisible)",
            'if (isVisible){ out << R"_htcpp_str_( Hello )_htcpp_str_";'
            'if (isVisible){ out << R"_htcpp_str_(<p>world</p>)_htcpp_str_"; } '
            'out << R"_htcpp_str_( )_htcpp_str_";if '
            '(isVisible){ out << R"_htcpp_str_(!)_htcpp_str_"; } '
            'out << R"_htcpp_str_( )_htcpp_str_"; } ',
        ),
        (
            "[[ Hello <p>@(auto i = 0; i < 5; ++i)world</p> [[!]]@(auto i = 0; i < 3; ++i) ]]"
            "@(auto i = 0; i < 5; ++i)",
            'for (auto i = 0; i < 5; ++i){ out << R"_htcpp_str_( Hello )_htcpp_str_";'
            "for (auto i = 0; i < 5; ++i){ out << "
            'R"_htcpp_str_(<p>world</p>)_htcpp_str_"; } out << R"_htcpp_str_( )_htcpp_str_";'
            'for (auto i = 0; i < 3; ++i){ out << R"_htcpp_str_(!)_htcpp_str_"; } '
            'out << R"_htcpp_str_( )_htcpp_str_"; } ',
        ),
    ],
)
def test_section_rendering(source, expected):
    assert _render_section(source) == expected


@pytest.mark.parametrize(
    "source, message",
    [
        ("[[ Hello world! ", "[line:1, column:1] Section isn't closed with ']]'"),
        ("[[]]", "[line:1, column:1] Section can't be empty"),
        (
            "[[?(isVisible) Hello world! ]]?(isVisible)",
            "[line:1, column:31] Section can't have multiple extensions",
        ),
        (
            "[[@(auto i; i < 5; ++i) Hello world! ]]?(isVisible)",
            "[line:1, column:40] Section can't have multiple extensions",
        ),
        (
            "[[?(isVisible) Hello world! ]]@(auto i; i < 5; ++i)",
            "[line:1, column:31] Section can't have multiple extensions",
        ),
        (
            "[[@(auto i; i < 5; ++i) Hello world! ]]@(auto i; i < 5; ++i)",
            "[line:1, column:40] Section can't have multiple extensions",
        ),
    ],
)
def test_section_errors(source, message):
    with pytest.raises(TemplateError) as info:
        SectionNode(StreamReader(source))
    assert str(info.value) == message


def test_procedure_basic():
    procedure = read_procedure(StreamReader("#hello_world(){ <p>Hello World! </p> }"))
    assert procedure.name == "hello_world"
    assert procedure.rendering_code() == 'out << R"_htcpp_str_( <p>Hello World! </p> )_htcpp_str_";'


def test_procedure_unclosed():
    with pytest.raises(TemplateError) as info:
        read_procedure(StreamReader("#hello_world(){<p>Hello World! </p>"))
    assert str(info.value) == "[line:1, column:1] Procedure isn't closed with '}'"


@pytest.mark.parametrize("source", ["#hello world(){x}", "#{ int x; }", "hello", "", "#abc"])
def test_read_procedure_returns_none_for_other_input(source):
    assert read_procedure(StreamReader(source)) is None


def test_procedure_empty_name_rejected():
    with pytest.raises(ValueError):
        ProcedureNode("", StreamReader("#(){x}"))


def test_procedure_leaves_stream_after_closing_brace():
    stream = StreamReader("#part(){x}rest")
    procedure = read_procedure(stream)
    assert procedure.rendering_code() == 'out << R"_htcpp_str_(x)_htcpp_str_";'
    assert stream.read(4) == "rest"


def test_tag_with_content():
    assert _render_tag('<div class="a">x</div>') == 'out << R"_htcpp_str_(<div class="a">x</div>)_htcpp_str_";'


def test_empty_element_tag_has_no_closing_tag():
    stream = StreamReader("<br>text")
    tag = TagNode(stream)
    assert tag.flatten() == [TextNode("<br"), TextNode(">")]
    assert stream.read(4) == "text"


def test_tag_with_expression_attribute():
    assert _render_tag('<a href="$(url)">x</a>') == (
        'out << R"_htcpp_str_(<a href=")_htcpp_str_";'
        "out << (url);"
        'out << R"_htcpp_str_(">x</a>)_htcpp_str_";'
    )


def test_tag_with_closing_extension():
    assert _render_tag("<p>x</p>?(flag)") == 'if (flag){ out << R"_htcpp_str_(<p>x</p>)_htcpp_str_"; } '


def test_nested_tags():
    assert _render_tag("<div><p>a</p></div>") == 'out << R"_htcpp_str_(<div><p>a</p></div>)_htcpp_str_";'


@pytest.mark.parametrize(
    "source, message",
    [
        ("< >", "[line:1, column:1] Tag's name can't be empty"),
        ("<div", "[line:1, column:1] Tag's name can't be empty"),
        ("<div>", "[line:1, column:1] Tag isn't closed with </div>"),
        ("<div class", "[line:1, column:1] Tag isn't closed with '>'"),
        ("<p>?(a)x</p>?(b)", "[line:1, column:13] Tag can't have multiple extensions"),
    ],
)
def test_tag_errors(source, message):
    with pytest.raises(TemplateError) as info:
        TagNode(StreamReader(source))
    assert str(info.value) == message


def test_read_non_tag_node_kinds():
    assert isinstance(read_non_tag_node(StreamReader("<p>a</p>")), TagNode)
    assert isinstance(read_non_tag_node(StreamReader("[[a]]")), SectionNode)
    assert isinstance(read_non_tag_node(StreamReader("$(x)")), ExpressionNode)
    assert read_non_tag_node(StreamReader("plain")) is None
    assert read_non_tag_node(StreamReader("")) is None


def test_read_tag_content_node_skips_closing_tag():
    assert read_tag_content_node(StreamReader("</p>")) is None
    assert isinstance(read_tag_content_node(StreamReader("<b>x</b>")), TagNode)


def test_read_tag_attribute_node_ignores_tags():
    assert read_tag_attribute_node(StreamReader("<p>x</p>")) is None
    assert read_tag_attribute_node(StreamReader("${ int a; }")).rendering_code() == " int a; "


def test_read_global_statement():
    assert read_global_statement(StreamReader("#{ int a; }")).rendering_code() == " int a; "
    assert read_global_statement(StreamReader("#name(){}")) is None


def test_flatten_nodes_expands_collections():
    nodes = [TextNode("a"), SectionNode(StreamReader("[[b]]"))]
    assert flatten_nodes(nodes) == [TextNode("a"), TextNode("b")]


def test_optimize_nodes_merges_adjacent_text():
    expression = ExpressionNode(StreamReader("$(x)"))
    result = optimize_nodes([TextNode("a"), TextNode("b"), expression, TextNode("c")])
    assert len(result) == 3
    assert result[0] == TextNode("ab")
    assert result[1] is expression
    assert result[2] == TextNode("c")


def test_consume_read_text_keeps_raw_text_when_empty_list():
    nodes = []
    consume_read_text("\n  hi\n  ", nodes)
    assert nodes == [TextNode("\n  hi\n  ")]


def test_consume_read_text_trims_after_other_node():
    nodes = [ExpressionNode(StreamReader("$(x)"))]
    consume_read_text("\n  hi\n  ", nodes)
    assert nodes[1:] == [TextNode("hi")]


def test_consume_read_text_drops_blank_text():
    nodes = [ExpressionNode(StreamReader("$(x)"))]
    consume_read_text("\n   ", nodes)
    assert len(nodes) == 1


def test_consume_read_text_keeps_raw_text_before_tag():
    nodes = [ExpressionNode(StreamReader("$(x)"))]
    tag = TagNode(StreamReader("<p>a</p>"))
    consume_read_text("\n  hi\n  ", nodes, tag)
    assert nodes[1:] == [TextNode("\n  hi\n  ")]


def test_consume_read_attributes_text_trims():
    nodes = []
    consume_read_attributes_text("\n   id=1\n  ", nodes)
    consume_read_attributes_text("", nodes)
    assert nodes == [TextNode("id=1")]