"""
Tests for identifier notation conversions.
"""
import unittest

from antdoc.core.notations import camel_case_words, to_lower_camel_case, to_lower_case_hyphenated


class TestNotations(unittest.TestCase):
    """Test cases for camel case and hyphenated conversions."""

    def test_camel_case_words(self):
        self.assertEqual(camel_case_words("HTTPProxy"), ["HTTP", "Proxy"])

    def test_to_lower_camel_case(self):
        self.assertEqual(to_lower_camel_case("FileSet"), "fileSet")
        self.assertEqual(to_lower_camel_case("URL"), "url")
        self.assertEqual(to_lower_camel_case("HTTPProxy"), "httpProxy")
        self.assertEqual(to_lower_camel_case("Foo2Bar"), "foo2Bar")

    def test_to_lower_camel_case_keeps_other_characters(self):
        self.assertEqual(to_lower_camel_case("Foo_bar"), "foo_bar")
        self.assertEqual(to_lower_camel_case("Foo_Bar"), "foo_bar")
        self.assertEqual(to_lower_camel_case("Foo$Bar"), "foo$bar")
        self.assertEqual(to_lower_camel_case("_"), "_")

    def test_to_lower_case_hyphenated(self):
        self.assertEqual(to_lower_case_hyphenated("destFile"), "dest-file")
        self.assertEqual(to_lower_case_hyphenated("FileSet"), "file-set")
        self.assertEqual(to_lower_case_hyphenated("dest_file"), "dest_file")


if __name__ == '__main__':
    unittest.main()
