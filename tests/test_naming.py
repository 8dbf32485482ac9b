"""
Unit tests for the naming helpers.
"""
import unittest

from openapi_db_generator.domain.naming import (
    generate_foreign_key_column,
    generate_foreign_key_name,
    generate_index_name,
    generate_relationship_name,
    generate_table_name,
    generate_via_names,
    to_snake_case,
    trim_prefix,
)


class TestCaseConversion(unittest.TestCase):

    def test_to_snake_case(self):
        self.assertEqual(to_snake_case("UserAccount"), "user_account")
        self.assertEqual(to_snake_case("XMLHttpRequest"), "xml_http_request")
        self.assertEqual(to_snake_case("already_snake"), "already_snake")

    def test_to_snake_case_rejects_non_strings(self):
        with self.assertRaises(TypeError):
            to_snake_case(None)


class TestTableNames(unittest.TestCase):

    def test_table_name_is_plural_snake_case(self):
        self.assertEqual(generate_table_name("Domain"), "domains")
        self.assertEqual(generate_table_name("PostTag"), "post_tags")
        self.assertEqual(generate_table_name("Category"), "categories")

    def test_trim_prefix(self):
        self.assertEqual(trim_prefix("junction_PostTag", "junction_"), "PostTag")
        self.assertEqual(trim_prefix("PostTag", "junction_"), "PostTag")


class TestColumnNames(unittest.TestCase):

    def test_foreign_key_column(self):
        self.assertEqual(generate_foreign_key_column("author"), "author_id")
        self.assertEqual(generate_foreign_key_column("domain_id"), "domain_id")

    def test_relationship_name_strips_id_suffix(self):
        self.assertEqual(generate_relationship_name("author_id"), "author")
        self.assertEqual(generate_relationship_name("owner"), "owner")

    def test_foreign_key_name(self):
        self.assertEqual(
            generate_foreign_key_name("posts", "author_id", "users", "id"),
            "fk_posts_author_id_users_id",
        )


class TestIndexNames(unittest.TestCase):

    def test_plain_index(self):
        self.assertEqual(generate_index_name("posts", ["title"]), "posts_title_index")

    def test_unique_index(self):
        self.assertEqual(generate_index_name("users", ["email"], is_unique=True), "users_email_key")

    def test_typed_composite_index(self):
        self.assertEqual(
            generate_index_name("posts", ["a", "b"], method="gin"),
            "posts_a_b_gin_index",
        )


class TestViaNames(unittest.TestCase):

    def test_via_names_are_symmetric(self):
        self.assertEqual(generate_via_names("Tag", "Post"), ("posts2tags", "Posts2Tags"))
        self.assertEqual(generate_via_names("Post", "Tag"), ("posts2tags", "Posts2Tags"))


if __name__ == "__main__":
    unittest.main()
