"""
Unit tests for x-indexes parsing and index resolution.
"""
import unittest

from openapi_db_generator.domain.constraints import IndexResolver, IndexSpec, parse_index_spec


class TestParseIndexSpec(unittest.TestCase):

    def test_single_property(self):
        self.assertEqual(parse_index_spec("title"), IndexSpec(properties=["title"]))

    def test_composite(self):
        spec = parse_index_spec("author, title")
        self.assertEqual(spec.properties, ["author", "title"])
        self.assertFalse(spec.is_unique)
        self.assertIsNone(spec.method)

    def test_unique(self):
        spec = parse_index_spec("unique:email")
        self.assertTrue(spec.is_unique)
        self.assertIsNone(spec.method)
        self.assertEqual(spec.properties, ["email"])

    def test_method(self):
        spec = parse_index_spec("gin:tags")
        self.assertFalse(spec.is_unique)
        self.assertEqual(spec.method, "gin")

    def test_invalid_specs(self):
        for bad in ["", "   ", "gin:", "unique: , ", None]:
            with self.subTest(spec=bad):
                with self.assertRaises(ValueError):
                    parse_index_spec(bad)


class TestIndexResolver(unittest.TestCase):

    def setUp(self):
        self.resolver = IndexResolver("posts", {"title": "title", "author": "author_id"})

    def test_property_names_map_to_columns(self):
        indexes = self.resolver.resolve(["author,title", "unique:title"])
        self.assertEqual([index.name for index in indexes], ["posts_author_id_title_index", "posts_title_key"])
        self.assertEqual(indexes[0].columns, ["author_id", "title"])
        self.assertTrue(indexes[1].is_unique)

    def test_duplicates_are_dropped(self):
        indexes = self.resolver.resolve(["title", "title"])
        self.assertEqual(len(indexes), 1)

    def test_unknown_property_is_kept_with_warning(self):
        with self.assertLogs("openapi_db_generator.domain.constraints", level="WARNING") as logs:
            indexes = self.resolver.resolve(["missing"])
        self.assertEqual(indexes[0].columns, ["missing"])
        self.assertIn("missing", logs.output[0])


if __name__ == "__main__":
    unittest.main()
