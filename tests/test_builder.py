"""
Tests for the model builder.
"""
import os
import tempfile
import unittest
import zipfile
from pathlib import Path

from antdoc.analysis import ModelBuilder
from antdoc.analysis.type_groups import TASK
from antdoc.antlib import ResourceLocator
from antdoc.core import AntlibError, DeclarationStore, Diagnostics

from declaration_builders import add, declaration, group_tags, method

FILE_SET = "org.apache.tools.ant.types.FileSet"


def antlib(*definitions: str) -> str:
    return "<antlib>\n" + "\n".join(definitions) + "\n</antlib>\n"


class TestModelBuilder(unittest.TestCase):
    """Test cases for building the model from ANTLIB files."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.store = DeclarationStore()
        self.diagnostics = Diagnostics()
        self.builder = ModelBuilder(self.store, self.diagnostics, ResourceLocator([self.root]))

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, relative_path: str, content: str) -> str:
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_single_attribute_in_other_group(self):
        add(self.store, declaration("pkg.Echo", [method("setMessage", [("message", "java.lang.String")])]))
        path = self.write("antlib.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])
        echo = registry.other.types[0]
        self.assertEqual([a.name for a in echo.attributes], ["message"])
        self.assertEqual(echo.subelements, [])
        self.assertEqual(self.diagnostics.errors, [])

    def test_named_subelement(self):
        add(self.store, declaration("pkg.Echo", [
            method("setMessage", [("message", "java.lang.String")]),
            method("addConfiguredFileSet", [("fileSet", FILE_SET)]),
        ]))
        path = self.write("antlib.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))

        registry = self.builder.build([path])

        echo = registry.other.types[0]
        self.assertEqual(len(echo.subelements), 1)
        self.assertEqual(echo.subelements[0].name, "fileSet")
        self.assertEqual(echo.subelements[0].type, FILE_SET)

    def test_group_root_built_once(self):
        add(self.store,
            declaration("pkg.AbstractTask", tags=group_tags(
                "tasks", "Task", "Tasks", title_mf='Task "<{0}>"', heading_mf="<{0}>",
            )),
            declaration("pkg.Echo", superclass="pkg.AbstractTask"),
            declaration("pkg.Copy", superclass="pkg.AbstractTask"))
        path = self.write("antlib.xml", antlib(
            '<typedef name="echo" classname="pkg.Echo"/>',
            '<typedef name="copy" classname="pkg.Copy"/>',
        ))

        registry = self.builder.build([path])

        group = registry.get("pkg.AbstractTask")
        self.assertEqual(group.subdir, "tasks")
        self.assertEqual([t.name for t in group.types], ["echo", "copy"])
        self.assertEqual(len([g for g in registry if g is group]), 1)
        self.assertEqual(registry.other.types, [])
        self.assertEqual(len(self.diagnostics.warnings), 1)

    def test_taskdef_goes_to_tasks_only(self):
        add(self.store, declaration("pkg.Check", interfaces=["org.apache.tools.ant.taskdefs.condition.Condition"]))
        path = self.write("antlib.xml", antlib('<taskdef name="check" classname="pkg.Check"/>'))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.get(TASK).types], ["check"])
        self.assertEqual(registry.get("org.apache.tools.ant.taskdefs.condition.Condition").types, [])
        self.assertEqual(registry.get(TASK).types[0].kind, "taskdef")

    def test_typedef_goes_to_every_matching_group(self):
        add(self.store, declaration("pkg.Check", superclass=TASK,
                                    interfaces=["org.apache.tools.ant.taskdefs.condition.Condition"]))
        path = self.write("antlib.xml", antlib('<typedef name="check" classname="pkg.Check"/>'))

        registry = self.builder.build([path])

        self.assertEqual(registry.get_statistics()["tasks"], 1)
        self.assertEqual(registry.get_statistics()["conditions"], 1)
        self.assertIs(registry.get(TASK).types[0],
                      registry.get("org.apache.tools.ant.taskdefs.condition.Condition").types[0])

    def test_adapt_to(self):
        add(self.store, declaration("pkg.Echo"), declaration("pkg.Adapter"))
        path = self.write("antlib.xml", antlib(
            '<typedef name="echo" classname="pkg.Echo" adaptTo="pkg.Adapter"/>',
        ))

        registry = self.builder.build([path])

        self.assertEqual(registry.other.types[0].adapt_to.qualified_name, "pkg.Adapter")

    def test_missing_class_skips_only_that_record(self):
        add(self.store, declaration("pkg.Echo"))
        path = self.write("antlib.xml", antlib(
            '<typedef name="missing" classname="pkg.Missing"/>',
            '<typedef name="echo" classname="pkg.Echo"/>',
        ))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])
        self.assertEqual(len(self.diagnostics.errors), 1)
        self.assertIn("pkg.Missing", self.diagnostics.errors[0].message)

    def test_stub_class_is_not_found(self):
        add(self.store, declaration("pkg.Echo", superclass="pkg.Unparsed"))
        self.store.get_or_stub("pkg.Unparsed")
        path = self.write("antlib.xml", antlib('<typedef name="base" classname="pkg.Unparsed"/>'))

        registry = self.builder.build([path])

        self.assertEqual(registry.other.types, [])
        self.assertEqual(len(self.diagnostics.errors), 1)

    def test_invalid_combination_of_attributes(self):
        path = self.write("antlib.xml", antlib(
            '<typedef name="echo" classname="pkg.Echo" file="other.xml"/>',
            '<typedef name="echo"/>',
        ))

        self.builder.build([path])

        self.assertEqual(len(self.diagnostics.errors), 2)
        for error in self.diagnostics.errors:
            self.assertIn("Invalid combination of attributes", error.message)

    def test_nested_file_relative_to_document(self):
        add(self.store, declaration("pkg.Echo"))
        self.write("sub/nested.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))
        path = self.write("sub/antlib.xml", antlib('<typedef file="nested.xml"/>'))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])
        self.assertEqual(self.diagnostics.errors, [])

    def test_missing_nested_file(self):
        path = self.write("antlib.xml", antlib('<typedef file="nowhere.xml"/>'))

        self.builder.build([path])

        self.assertEqual(len(self.diagnostics.errors), 1)
        self.assertIn("nowhere.xml", self.diagnostics.errors[0].message)

    def test_resource_on_source_path(self):
        add(self.store, declaration("pkg.Echo"))
        self.write("com/acme/antlib.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))

        registry = self.builder.build(antlib_resources=["com/acme/antlib.xml"])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])

    def test_resource_in_archive_on_class_path(self):
        add(self.store, declaration("pkg.Echo"))
        jar = self.root / "lib" / "acme.jar"
        jar.parent.mkdir()
        with zipfile.ZipFile(jar, "w") as archive:
            archive.writestr("com/acme/antlib.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))
        builder = ModelBuilder(self.store, self.diagnostics,
                               ResourceLocator([self.root / "src"], [jar]))

        registry = builder.build(antlib_resources=["com/acme/antlib.xml"])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])

    def test_nested_resource(self):
        add(self.store, declaration("pkg.Echo"))
        self.write("com/acme/types.xml", antlib('<typedef name="echo" classname="pkg.Echo"/>'))
        path = self.write("antlib.xml", antlib('<typedef resource="com/acme/types.xml"/>'))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])

    def test_missing_resource(self):
        self.assertFalse(self.builder.add_antlib_resource("com/acme/none.xml"))
        self.assertEqual(len(self.diagnostics.errors), 1)
        self.assertIn("com/acme/none.xml", self.diagnostics.errors[0].message)

    def test_self_inclusion_is_reported_once(self):
        add(self.store, declaration("pkg.Echo"))
        path = self.write("antlib.xml", antlib(
            '<typedef name="echo" classname="pkg.Echo"/>',
            '<typedef file="antlib.xml"/>',
        ))

        registry = self.builder.build([path])

        self.assertEqual([t.name for t in registry.other.types], ["echo"])
        self.assertEqual(len(self.diagnostics.warnings), 1)
        self.assertIn("includes itself", self.diagnostics.warnings[0].message)

    def test_macrodef_is_reported(self):
        path = self.write("antlib.xml", antlib(
            '<macrodef name="m"><sequential/></macrodef>',
            '<macrodef name="n"><sequential/></macrodef>',
        ))

        self.builder.build([path])

        self.assertEqual(len(self.diagnostics.warnings), 1)
        self.assertIn("<macrodef>s are not yet supported", self.diagnostics.warnings[0].message)

    def test_nothing_to_document_warns(self):
        registry = self.builder.build()

        self.assertEqual(len(self.diagnostics.warnings), 1)
        self.assertEqual(registry.get_statistics()["otherTypes"], 0)

    def test_missing_file_is_systemic(self):
        with self.assertRaises(AntlibError):
            self.builder.build([os.path.join(self.temp_dir.name, "none.xml")])

    def test_malformed_file_is_systemic(self):
        path = self.write("antlib.xml", "<antlib><typedef name=")

        with self.assertRaises(AntlibError):
            self.builder.build([path])


if __name__ == '__main__':
    unittest.main()
