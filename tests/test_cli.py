"""
Tests for the command-line interface.
"""
import json
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from antdoc.cli import cli, make_options, model_to_dict

ECHO_SOURCE = """
package com.acme;

import org.apache.tools.ant.Task;

/**
 * Prints a message.
 */
public class Echo extends Task {

    /**
     * The message to print.
     */
    public void setMessage(String message) {
    }

    /** Whether to append. */
    public void setAppend(boolean append) {
    }
}
"""

ANTLIB = """<?xml version="1.0"?>
<antlib>
    <taskdef name="echo" classname="com.acme.Echo"/>
    <typedef name="ghost" classname="com.acme.Ghost"/>
</antlib>
"""


class TestCli(unittest.TestCase):
    """Test cases for the antdoc commands."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.sources = self.root / "src"
        (self.sources / "com" / "acme").mkdir(parents=True)
        (self.sources / "com" / "acme" / "Echo.java").write_text(ECHO_SOURCE)
        (self.sources / "com" / "acme" / "antlib.xml").write_text(ANTLIB)
        self.runner = CliRunner()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_generate(self):
        destination = self.root / "doc"

        result = self.runner.invoke(cli, [
            "generate", str(self.sources),
            "--antlib-resource", "com/acme/antlib.xml",
            "--sourcepath", str(self.sources),
            "-d", str(destination),
            "--doctitle", "Acme",
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((destination / "index.html").is_file())
        page = (destination / "tasks" / "echo.html").read_text(encoding="utf-8")
        self.assertIn('id="message_attribute_detail"', page)
        self.assertIn("The message to print.", page)
        self.assertIn("1 error(s)", result.output)

    def test_generate_with_antlib_file(self):
        destination = self.root / "doc"

        result = self.runner.invoke(cli, [
            "generate", str(self.sources),
            "--antlib-file", str(self.sources / "com" / "acme" / "antlib.xml"),
            "-d", str(destination),
            "--quiet",
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((destination / "tasks" / "echo.html").is_file())

    def test_inspect_json(self):
        json_path = self.root / "model.json"

        result = self.runner.invoke(cli, [
            "inspect", str(self.sources),
            "--antlib-file", str(self.sources / "com" / "acme" / "antlib.xml"),
            "--json", str(json_path),
        ])

        self.assertEqual(result.exit_code, 0, result.output)
        model = json.loads(json_path.read_text())
        tasks = next(g for g in model["typeGroups"] if g["subdir"] == "tasks")
        self.assertEqual([t["name"] for t in tasks["types"]], ["echo"])
        self.assertEqual([a["name"] for a in tasks["types"][0]["attributes"]], ["message", "append"])
        self.assertEqual(tasks["types"][0]["kind"], "taskdef")

    def test_malformed_antlib_aborts(self):
        broken = self.root / "broken.xml"
        broken.write_text("<antlib><taskdef")

        result = self.runner.invoke(cli, [
            "inspect", str(self.sources), "--antlib-file", str(broken),
        ])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Malformed ANTLIB", result.output)

    def test_make_options(self):
        options = make_options(
            antlib_files=("a.xml",), antlib_resources=("com/acme/antlib.xml",),
            no_bundled_externals=True, sourcepath=None, classpath="lib/ant.jar", doc_title=None,
        )

        self.assertEqual(options.antlib_files, [Path("a.xml")])
        self.assertFalse(options.use_bundled_externals)
        self.assertEqual(options.class_path, [Path("lib/ant.jar")])
        self.assertEqual(options.source_path, [Path(".")])
        self.assertIsNone(options.doc_title)

    def test_model_to_dict_of_empty_model(self):
        from antdoc.analysis import builtin_registry

        model = model_to_dict(builtin_registry())

        self.assertEqual(len(model["typeGroups"]), 5)
        self.assertTrue(all(g["types"] == [] for g in model["typeGroups"]))


if __name__ == '__main__':
    unittest.main()
