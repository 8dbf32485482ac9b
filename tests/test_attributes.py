"""
Unit tests for resolving one schema into a table model.
"""
import unittest
from pathlib import Path

from openapi_db_generator.document import OpenApiDocument, load_document
from openapi_db_generator.domain.attributes import AttributeResolver
from openapi_db_generator.domain.eligibility import EligibilityFilter
from openapi_db_generator.domain.junctions import JunctionSchemaDetector, JunctionSchemas
from openapi_db_generator.domain.models import RelationType

SPECS_DIR = Path(__file__).parent / "specs"


class TestBlogAttributes(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.document = load_document(SPECS_DIR / "blog.yaml")
        cls.eligibility = EligibilityFilter(exclude_models=["Error"], skip_underscored_schemas=True)

    def _resolve(self, schema_name):
        resolver = AttributeResolver(
            schema_name, self.document.get_schema(schema_name), JunctionSchemas(), self.eligibility
        )
        return resolver.resolve()

    def test_columns_follow_property_order(self):
        post = self._resolve("Post")
        self.assertEqual(
            [col.name for col in post.columns],
            ["uid", "title", "slug", "active", "category_id", "created_at", "created_by_id", "meta"],
        )

    def test_scalar_columns(self):
        post = self._resolve("Post")

        uid = post.get_column("uid")
        self.assertTrue(uid.is_pk)
        self.assertFalse(uid.nullable)
        self.assertEqual(uid.db_type, "bigpk")
        self.assertEqual(post.pk_name, "uid")

        title = post.get_column("title")
        self.assertEqual(title.db_type, "text")
        self.assertFalse(title.nullable)

        slug = post.get_column("slug")
        self.assertEqual(slug.db_type, "string")
        self.assertEqual(slug.size, 200)
        self.assertEqual(slug.min_length, 1)
        self.assertTrue(slug.nullable)

        active = post.get_column("active")
        self.assertEqual(active.db_type, "boolean")
        self.assertIs(active.default, False)

        self.assertEqual(post.get_column("created_at").db_type, "date")

    def test_reference_to_custom_table(self):
        post = self._resolve("Post")
        category = post.get_column_by_property("category")
        self.assertEqual(category.name, "category_id")
        self.assertEqual(category.db_type, "integer")
        self.assertFalse(category.nullable)
        self.assertTrue(category.is_foreign_key)
        self.assertEqual(category.foreign_key_to, ("v2_categories", "id"))

        fk = post.foreign_keys[0]
        self.assertEqual(fk.name, "fk_posts_category_id_v2_categories_id")
        self.assertEqual(fk.referenced_table, "v2_categories")

    def test_reference_to_big_pk(self):
        post = self._resolve("Post")
        created_by = post.get_column("created_by_id")
        self.assertEqual(created_by.db_type, "bigint")
        self.assertEqual(created_by.python_type, "int")
        self.assertEqual(created_by.foreign_key_to, ("users", "id"))

    def test_non_table_reference_is_json(self):
        meta = self._resolve("Post").get_column("meta")
        self.assertEqual(meta.db_type, "json")
        self.assertFalse(meta.is_foreign_key)

    def test_relations(self):
        post = self._resolve("Post")
        self.assertEqual([rel.name for rel in post.has_one], ["category", "created_by"])
        self.assertEqual(post.has_one[0].link, {"id": "category_id"})
        self.assertEqual(post.has_one[0].related_table_name, "v2_categories")

        comments, = post.one_to_many
        self.assertEqual(comments.name, "comments")
        self.assertEqual(comments.relation_type, RelationType.HAS_MANY)
        self.assertEqual(comments.related_schema_name, "Comment")
        self.assertEqual(comments.link, {"post_id": "uid"})
        self.assertEqual(post.many_to_many, [])

    def test_indexes(self):
        post = self._resolve("Post")
        self.assertEqual(
            [index.name for index in post.indexes],
            ["posts_category_id_created_by_id_index", "posts_title_gin_index"],
        )
        self.assertEqual(post.indexes[0].columns, ["category_id", "created_by_id"])
        self.assertEqual(post.indexes[1].method, "gin")

        user = self._resolve("User")
        self.assertEqual(user.indexes[0].name, "users_email_key")
        self.assertTrue(user.indexes[0].is_unique)

    def test_custom_table_has_many(self):
        category = self._resolve("Category")
        self.assertEqual(category.table_name, "v2_categories")
        posts, = category.one_to_many
        self.assertEqual(posts.related_table_name, "posts")
        self.assertEqual(posts.link, {"category_id": "id"})

    def test_comment_types(self):
        comment = self._resolve("Comment")
        self.assertEqual(comment.get_column("post_id").db_type, "bigint")
        self.assertEqual(comment.get_column("post_id").foreign_key_to, ("posts", "uid"))
        self.assertEqual(comment.get_column("message").db_type, "json")
        self.assertEqual(comment.get_column("meta_data").db_type, "jsonb")
        self.assertEqual(comment.get_column("created_at").db_type, "timestamp")


class TestNullability(unittest.TestCase):

    def test_only_required_decides_nullability(self):
        document = OpenApiDocument({"components": {"schemas": {
            "Note": {
                "type": "object",
                "required": ["id", "title"],
                "properties": {
                    "id": {"type": "integer"},
                    "title": {"type": "string", "nullable": True},
                    "body": {"type": "string", "nullable": False},
                },
            },
        }}})
        note = AttributeResolver(
            "Note", document.get_schema("Note"), JunctionSchemas(), EligibilityFilter()
        ).resolve()
        self.assertFalse(note.get_column("title").nullable)
        self.assertTrue(note.get_column("body").nullable)


class TestManyToManyAttributes(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.document = load_document(SPECS_DIR / "many2many.yaml")
        cls.eligibility = EligibilityFilter()
        cls.junctions = JunctionSchemaDetector(cls.eligibility).detect(cls.document)

    def _resolve(self, schema_name, model_name=None):
        resolver = AttributeResolver(
            schema_name,
            self.document.get_schema(schema_name),
            self.junctions,
            self.eligibility,
            model_name=model_name,
        )
        return resolver.resolve()

    def test_junction_relation_is_unresolved(self):
        tags, = self._resolve("Post").many_to_many
        self.assertTrue(tags.from_junction)
        self.assertEqual(tags.related_schema_name, "Tag")
        self.assertEqual(tags.via_table_name, "post_tags")
        self.assertEqual(tags.via_model_name, "PostTag")
        self.assertEqual((tags.via_column, tags.via_related_column), ("post_id", "tag_id"))
        self.assertFalse(tags.is_resolved)
        self.assertIsNone(tags.has_via_model)

    def test_array_reference_to_junction_adds_no_column(self):
        post = self._resolve("Post")
        self.assertEqual([col.name for col in post.columns], ["id", "title"])

    def test_junction_model(self):
        photo_album = self._resolve("junction_PhotoAlbum", model_name="PhotoAlbum")
        self.assertTrue(photo_album.is_junction)
        self.assertEqual(photo_album.name, "PhotoAlbum")
        self.assertEqual(photo_album.schema_name, "junction_PhotoAlbum")
        self.assertEqual(photo_album.table_name, "photo_albums")
        self.assertEqual(photo_album.get_column("photo_id").db_type, "uuid")
        self.assertFalse(photo_album.get_column("album_id").nullable)

    def test_link_table_relation(self):
        labels, = self._resolve("Article").many_to_many
        self.assertFalse(labels.from_junction)
        self.assertEqual(labels.via_table_name, "articles2labels")
        self.assertEqual(labels.via_model_name, "Articles2Labels")
        self.assertEqual((labels.via_column, labels.via_related_column), ("article_id", "label_id"))

        articles, = self._resolve("Label").many_to_many
        self.assertEqual(articles.via_table_name, "articles2labels")
        self.assertEqual((articles.via_column, articles.via_related_column), ("label_id", "article_id"))


if __name__ == "__main__":
    unittest.main()
