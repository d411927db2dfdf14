"""
Tests for the type group classifier.
"""
import unittest

from antdoc.analysis import TypeGroupClassifier, builtin_registry
from antdoc.analysis.type_groups import CONDITION, RESOURCE_COLLECTION, TASK
from antdoc.core import DeclarationStore, Diagnostics, TypeGroupConfigurationError

from declaration_builders import add, declaration, group_tags


class TestBuiltinRegistry(unittest.TestCase):
    """Test cases for the seeded groups."""

    def test_builtin_groups(self):
        registry = builtin_registry()

        self.assertEqual(
            [g.subdir for g in registry],
            ["tasks", "resourceCollections", "chainableReaders", "conditions", "otherTypes"],
        )
        self.assertEqual(registry.get(TASK).type_title("echo"), 'Task "<echo>"')
        self.assertEqual(registry.get(TASK).type_heading("echo"), "<echo>")
        self.assertEqual(registry.other.type_title("foo"), 'Type "<foo>"')
        self.assertIsNone(registry.get("com.acme.Unknown"))


class TestTypeGroupClassifier(unittest.TestCase):
    """Test cases for the derivation of type groups from ancestors."""

    def setUp(self):
        self.store = DeclarationStore()
        self.diagnostics = Diagnostics()
        self.classifier = TypeGroupClassifier(self.store, self.diagnostics)
        self.registry = builtin_registry()

    def test_task_subclass(self):
        echo = add(self.store, declaration("pkg.Echo", superclass=TASK)).find_declaration("pkg.Echo")

        groups = self.classifier.classify(echo, self.registry)

        self.assertEqual([g.subdir for g in groups], ["tasks"])

    def test_no_group_yields_other(self):
        plain = add(self.store, declaration("pkg.Plain")).find_declaration("pkg.Plain")

        groups = self.classifier.classify(plain, self.registry)

        self.assertEqual(groups, [self.registry.other])

    def test_multiple_groups(self):
        both = declaration("pkg.Both", superclass=TASK, interfaces=[CONDITION, RESOURCE_COLLECTION])
        add(self.store, both)

        groups = self.classifier.classify(both, self.registry)

        self.assertEqual([g.subdir for g in groups], ["tasks", "conditions", "resourceCollections"])

    def test_custom_group_is_registered_once(self):
        root = declaration("com.acme.Widget", kind="interface",
                           tags=group_tags("widgets", "Widget", "Widgets"))
        spinner = declaration("com.acme.Spinner", interfaces=["com.acme.Widget"])
        slider = declaration("com.acme.Slider", interfaces=["com.acme.Widget"])
        add(self.store, root, spinner, slider)

        first = self.classifier.classify(spinner, self.registry)
        second = self.classifier.classify(slider, self.registry)

        self.assertIs(first[0], second[0])
        self.assertIs(self.registry.get("com.acme.Widget"), first[0])
        self.assertEqual(len(self.registry), 6)
        self.assertEqual(first[0].type_title("spinner"), 'Widget "<spinner>"')

    def test_custom_group_reusing_a_subdir_is_reported(self):
        root = declaration("com.acme.AbstractTask", tags=group_tags("tasks", "Acme task", "Acme tasks"))
        echo = declaration("com.acme.Echo", superclass="com.acme.AbstractTask")
        add(self.store, root, echo)

        groups = self.classifier.classify(echo, self.registry)
        self.classifier.classify(echo, self.registry)

        self.assertEqual([g.name for g in groups], ["Acme task"])
        self.assertEqual(len(self.diagnostics.warnings), 1)
        self.assertIn("'tasks'", self.diagnostics.warnings[0].message)

    def test_custom_group_with_own_subdir_is_not_reported(self):
        root = declaration("com.acme.Widget", kind="interface",
                           tags=group_tags("widgets", "Widget", "Widgets"))
        spinner = declaration("com.acme.Spinner", interfaces=["com.acme.Widget"])
        add(self.store, root, spinner)

        self.classifier.classify(spinner, self.registry)

        self.assertEqual(len(self.diagnostics), 0)

    def test_classification_is_idempotent(self):
        root = declaration("com.acme.Widget", kind="interface",
                           tags=group_tags("widgets", "Widget", "Widgets"))
        spinner = declaration("com.acme.Spinner", interfaces=["com.acme.Widget"])
        add(self.store, root, spinner)

        first = self.classifier.classify(spinner, self.registry)
        size = len(self.registry)
        second = self.classifier.classify(spinner, self.registry)

        self.assertEqual(first, second)
        self.assertEqual(len(self.registry), size)

    def test_custom_templates(self):
        root = declaration("com.acme.Widget", kind="interface", tags=group_tags(
            "widgets", "Widget", "Widgets", title_mf="The {0} widget", heading_mf="{0}!",
        ))

        group = TypeGroupClassifier.group_of(root)

        self.assertEqual(group.type_title("spinner"), "The spinner widget")
        self.assertEqual(group.type_heading("spinner"), "spinner!")

    def test_partial_metadata_is_an_error(self):
        tags = group_tags("widgets", "Widget", "Widgets")
        del tags["@ant.typeGroupHeading"]
        root = declaration("com.acme.Widget", kind="interface", tags=tags)
        spinner = declaration("com.acme.Spinner", superclass=TASK, interfaces=["com.acme.Widget"])
        add(self.store, root, spinner)

        with self.assertRaises(TypeGroupConfigurationError):
            TypeGroupClassifier.group_of(root)

        groups = self.classifier.classify(spinner, self.registry)

        self.assertEqual([g.subdir for g in groups], ["tasks"])
        self.assertEqual(len(self.diagnostics.errors), 1)
        self.assertNotIn("com.acme.Widget", self.registry)

    def test_partial_metadata_without_other_groups_yields_other(self):
        root = declaration("com.acme.Widget", kind="interface",
                           tags={"@ant.typeTitleMf": ["The {0} widget"]})
        spinner = declaration("com.acme.Spinner", interfaces=["com.acme.Widget"])
        add(self.store, root, spinner)

        groups = self.classifier.classify(spinner, self.registry)

        self.assertEqual(groups, [self.registry.other])
        self.assertEqual(len(self.diagnostics.errors), 1)

    def test_group_reached_along_two_paths_is_listed_once(self):
        base = declaration("pkg.Base", superclass=TASK)
        echo = declaration("pkg.Echo", superclass="pkg.Base", interfaces=[])
        add(self.store, base, echo)

        groups = self.classifier.classify(echo, self.registry)

        self.assertEqual([g.subdir for g in groups], ["tasks"])


if __name__ == '__main__':
    unittest.main()
