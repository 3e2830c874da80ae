import pytest

from wikidump.flatten import clean_text, flatten
from wikidump.markup import Node, NodeKind


def kinds(nodes):
    return [node.kind for node in nodes]


class TestMarkupParser:
    def test_plain_text(self, markup_parser):
        assert markup_parser.parse("plain words") == (Node(NodeKind.TEXT, value="plain words"),)

    def test_heading(self, markup_parser):
        nodes = markup_parser.parse("== Header ==")
        assert nodes == (Node(NodeKind.HEADING, nodes=(Node(NodeKind.TEXT, value="Header"),), level=2),)

    def test_paragraph_break(self, markup_parser):
        nodes = markup_parser.parse("First paragraph.\n\n\nSecond paragraph.")
        assert kinds(nodes) == [NodeKind.TEXT, NodeKind.PARAGRAPH_BREAK, NodeKind.TEXT]

    def test_wikilink_text(self, markup_parser):
        (node,) = [n for n in markup_parser.parse("See [[Paris|the capital]].") if n.kind is NodeKind.LINK]
        assert node.value == "Paris"
        assert flatten(node.nodes) == "the capital"

    def test_link_trail(self, markup_parser):
        nodes = markup_parser.parse("Two [[apple]]s.")
        assert flatten(nodes) == "Two apples."
        assert nodes[-1] == Node(NodeKind.TEXT, value=".")

    def test_image_and_category(self, markup_parser):
        nodes = markup_parser.parse("[[File:Cat.jpg|thumb|A cat]] Cats purr.[[Category:Animals]]")
        assert nodes[0].kind is NodeKind.IMAGE
        assert nodes[-1].kind is NodeKind.CATEGORY
        assert clean_text(flatten(nodes)) == "Cats purr."

    def test_namespace_prefix_is_case_insensitive(self, markup_parser):
        nodes = markup_parser.parse("[[image:Dog.png]]")
        assert kinds(nodes) == [NodeKind.IMAGE]

    def test_external_link_label(self, markup_parser):
        nodes = markup_parser.parse("See [https://example.org Example site] now")
        assert NodeKind.EXTERNAL_LINK in kinds(nodes)
        assert flatten(nodes) == "See Example site now"

    def test_bare_url_stays_text(self, markup_parser):
        assert flatten(markup_parser.parse("Visit https://example.org today")) == "Visit https://example.org today"

    def test_template_and_parameter(self, markup_parser):
        nodes = markup_parser.parse("Before {{cite|x}} {{{1}}} after")
        assert NodeKind.TEMPLATE in kinds(nodes)
        assert NodeKind.PARAMETER in kinds(nodes)
        assert flatten(nodes) == "Before   after"

    def test_bold_and_italic(self, markup_parser):
        nodes = markup_parser.parse("'''Bold''' and ''italic''")
        assert kinds(nodes) == [
            NodeKind.BOLD,
            NodeKind.TEXT,
            NodeKind.BOLD,
            NodeKind.TEXT,
            NodeKind.ITALIC,
            NodeKind.TEXT,
            NodeKind.ITALIC,
        ]
        assert flatten(nodes) == "Bold and italic"

    def test_bold_italic_text_survives(self, markup_parser):
        assert flatten(markup_parser.parse("'''''both'''''")) == "both"

    def test_comment(self, markup_parser):
        nodes = markup_parser.parse("a<!-- hidden -->b")
        assert NodeKind.COMMENT in kinds(nodes)
        assert flatten(nodes) == "ab"

    def test_character_entity(self, markup_parser):
        nodes = markup_parser.parse("caf&eacute;")
        assert Node(NodeKind.CHARACTER_ENTITY, value="é") in nodes
        assert flatten(nodes) == "café"

    def test_extension_tag_dropped(self, markup_parser):
        nodes = markup_parser.parse("Fact.<ref>Source</ref>")
        assert kinds(nodes) == [NodeKind.TEXT, NodeKind.TAG]
        assert flatten(nodes) == "Fact."

    def test_html_tag_keeps_content(self, markup_parser):
        nodes = markup_parser.parse("<span>inner</span>")
        assert kinds(nodes) == [NodeKind.START_TAG, NodeKind.TEXT, NodeKind.END_TAG]
        assert flatten(nodes) == "inner"

    def test_table_dropped(self, markup_parser):
        nodes = markup_parser.parse('{| class="wikitable"\n| cell\n|}\nAfter')
        assert NodeKind.TABLE in kinds(nodes)
        assert clean_text(flatten(nodes)) == "After"

    def test_horizontal_divider(self, markup_parser):
        assert NodeKind.HORIZONTAL_DIVIDER in kinds(markup_parser.parse("above\n----\nbelow"))

    def test_unordered_list(self, markup_parser):
        nodes = markup_parser.parse("* one\n* two")
        assert nodes == (
            Node(
                NodeKind.UNORDERED_LIST,
                items=((Node(NodeKind.TEXT, value="one"),), (Node(NodeKind.TEXT, value="two"),)),
            ),
        )

    def test_ordered_and_definition_lists(self, markup_parser):
        assert kinds(markup_parser.parse("# a\n# b")) == [NodeKind.ORDERED_LIST]
        nodes = markup_parser.parse("; term\n: definition")
        assert kinds(nodes) == [NodeKind.DEFINITION_LIST]
        assert len(nodes[0].items) == 2

    def test_preformatted(self, markup_parser):
        nodes = markup_parser.parse("Intro\n code here")
        assert kinds(nodes) == [NodeKind.TEXT, NodeKind.PREFORMATTED]
        assert flatten(nodes[1].nodes) == "code here"

    def test_redirect(self, markup_parser):
        nodes = markup_parser.parse("#REDIRECT [[Target page]]")
        assert nodes == (Node(NodeKind.REDIRECT, value="Target page"),)
        assert flatten(nodes) == ""

    def test_magic_word(self, markup_parser):
        nodes = markup_parser.parse("__NOTOC__\nText")
        assert nodes[0] == Node(NodeKind.MAGIC_WORD, value="NOTOC")
        assert clean_text(flatten(nodes)) == "Text"

    def test_unknown_magic_word_is_text(self, markup_parser):
        assert flatten(markup_parser.parse("__SOMETHING__")) == "__SOMETHING__"


class TestLineLayout:
    @pytest.mark.parametrize(
        "middle",
        ["----", "{{Infobox}}", "[[File:Map.png|thumb|A map]]", "<!-- note -->", "__NOTOC__"],
    )
    def test_markup_only_line_adds_no_blank_line(self, markup_parser, middle):
        nodes = markup_parser.parse(f"Para one.\n{middle}\nPara two.")
        assert clean_text(flatten(nodes)) == "Para one.\nPara two."

    def test_markup_only_line_between_blank_lines(self, markup_parser):
        nodes = markup_parser.parse("Para one.\n\n{{Infobox}}\n\nPara two.")
        assert clean_text(flatten(nodes)) == "Para one.\nPara two."

    def test_leading_template_line(self, markup_parser):
        nodes = markup_parser.parse("{{Short description|Fruit}}\nApples are fruit.")
        assert nodes[0].kind is NodeKind.TEMPLATE
        assert flatten(nodes) == "Apples are fruit."


class TestStrayQuotes:
    def test_unclosed_bold(self, markup_parser):
        nodes = markup_parser.parse("'''unclosed bold\nnext")
        assert nodes[0].kind is NodeKind.BOLD
        assert flatten(nodes) == "unclosed bold\nnext"

    def test_split_text_kinds(self, markup_parser):
        nodes = markup_parser._split_text("a''b'''c'''''d")
        assert kinds(nodes) == [
            NodeKind.TEXT,
            NodeKind.ITALIC,
            NodeKind.TEXT,
            NodeKind.BOLD,
            NodeKind.TEXT,
            NodeKind.BOLD_ITALIC,
            NodeKind.TEXT,
        ]
        assert flatten(nodes) == "abcd"

    def test_single_apostrophe_kept(self, markup_parser):
        assert flatten(markup_parser.parse("the dog's bowl")) == "the dog's bowl"
