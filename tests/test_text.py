"""
Tests for the rendering of documentation text.
"""
import unittest

from markupsafe import Markup

from antdoc.analysis import ExternalAntdocs, LinkResolver, builtin_registry
from antdoc.analysis.type_groups import TASK
from antdoc.core import AntAttribute, AntType, DeclarationStore, Diagnostics, Link
from antdoc.render import DocTextRenderer, inline_tags, link_html

from declaration_builders import add, declaration, method


class TestLinkHtml(unittest.TestCase):
    """Test cases for rendering single links."""

    def test_code_link(self):
        link = Link(href="copy.html", label="<copy>", code=True)

        self.assertEqual(link_html(link), '<a href="copy.html"><code>&lt;copy&gt;</code></a>')
        self.assertEqual(link_html(link, plain=True), '<a href="copy.html">&lt;copy&gt;</a>')

    def test_label_override(self):
        link = Link(href="copy.html", label="<copy>", code=True)

        self.assertEqual(link_html(link, label="the <em>copy</em> task"),
                         '<a href="copy.html">the <em>copy</em> task</a>')

    def test_label_only(self):
        self.assertEqual(link_html(Link(label="a < b")), "a &lt; b")
        self.assertIsInstance(link_html(Link(label="x")), Markup)


class TestInlineTags(unittest.TestCase):
    """Test cases for splitting text into inline tags."""

    def test_plain_text(self):
        self.assertEqual(list(inline_tags("no tags")), [("no tags", None)])

    def test_tags(self):
        self.assertEqual(
            list(inline_tags("See {@link Copy the task} and {@code a}.")),
            [("See ", None), ("Copy the task", "link"), (" and ", None), ("a", "code"), (".", None)],
        )

    def test_nested_braces(self):
        self.assertEqual(list(inline_tags("{@code if (x) { y(); }}")), [("if (x) { y(); }", "code")])

    def test_unterminated_tag(self):
        self.assertEqual(list(inline_tags("a {@code b")), [("a ", None), ("{@code b", None)])


class TestDocTextRenderer(unittest.TestCase):
    """Test cases for rendering documentation text with links."""

    def setUp(self):
        self.store = DeclarationStore()
        self.diagnostics = Diagnostics()
        self.registry = builtin_registry()
        self.tasks = self.registry.get(TASK)

        self.set_message = method("setMessage", [("message", "java.lang.String")])
        self.echo_declaration = declaration("pkg.Echo", [self.set_message], superclass=TASK)
        self.copy_declaration = declaration("pkg.Copy", superclass=TASK)
        add(self.store, self.echo_declaration, self.copy_declaration)

        self.echo = AntType(
            name="echo",
            declaration=self.echo_declaration,
            attributes=[AntAttribute(name="message", member=self.set_message, type="java.lang.String")],
        )
        self.tasks.types.extend([self.echo, AntType(name="copy", declaration=self.copy_declaration)])

        resolver = LinkResolver(self.registry, self.store, ExternalAntdocs(use_bundled=False), self.diagnostics)
        self.renderer = DocTextRenderer(resolver)

    def render(self, text: str) -> str:
        return str(self.renderer.render(text, self.echo, self.tasks, self.echo_declaration))

    def test_html_passes_through(self):
        self.assertEqual(self.render("Prints <em>a</em> message."), "Prints <em>a</em> message.")

    def test_link(self):
        self.assertEqual(self.render("Like {@link Copy}."),
                         'Like <a href="copy.html"><code>&lt;copy&gt;</code></a>.')

    def test_link_with_label(self):
        self.assertEqual(self.render("Like {@link Copy the copy task}."),
                         'Like <a href="copy.html">the copy task</a>.')

    def test_linkplain(self):
        self.assertEqual(self.render("{@linkplain #setMessage(String)}"),
                         '<a href="#message_attribute_detail">message=&#34;...&#34;</a>')

    def test_unresolvable_link_degrades_to_label(self):
        self.assertEqual(self.render("See {@link Bogus}."), "See Bogus.")
        self.assertEqual(self.diagnostics.errors, [])

    def test_code_and_literal(self):
        self.assertEqual(self.render("{@code a<b} {@literal c&d}"), "<code>a&lt;b</code> c&amp;d")

    def test_doc_root(self):
        self.assertEqual(self.render("{@docRoot}/x.html"), "../x.html")
        self.assertEqual(str(self.renderer.render("{@docRoot}/x.html", None, None)), "./x.html")

    def test_unknown_tag_keeps_argument(self):
        self.assertEqual(self.render("{@value <x>}"), "&lt;x&gt;")

    def test_first_sentence(self):
        result = self.renderer.render_first_sentence("Like {@link Copy}. But different.", self.echo, self.tasks,
                                                     self.echo_declaration)

        self.assertEqual(str(result), 'Like <a href="copy.html"><code>&lt;copy&gt;</code></a>.')


if __name__ == '__main__':
    unittest.main()
