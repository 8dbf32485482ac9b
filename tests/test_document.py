"""
Unit tests for document loading, the exception hierarchy and colored logging.
"""
import logging
import os
import tempfile
import unittest
from pathlib import Path

from openapi_db_generator.colored_logging import (
    ColoredFormatter,
    log_highlight,
    log_progress,
    log_success,
    setup_colored_logging,
)
from openapi_db_generator.document import OpenApiDocument, load_document
from openapi_db_generator.exceptions import (
    ConfigurationError,
    OpenApiDbGeneratorError,
    SchemaDocumentError,
    StructuralDocumentError,
)

SPECS_DIR = Path(__file__).parent / "specs"


class TestOpenApiDocument(unittest.TestCase):

    def test_schemas_in_document_order(self):
        document = load_document(SPECS_DIR / "relations.yaml")
        self.assertEqual(document.schema_names(), ["Account", "Domain", "Error"])
        self.assertEqual([name for name, _ in document.items()], ["Account", "Domain", "Error"])
        self.assertEqual(len(document), 3)
        self.assertIn("Domain", document)

    def test_get_schema(self):
        document = load_document(SPECS_DIR / "relations.yaml")
        domain = document.get_schema("Domain")
        self.assertIs(document.get_schema("Domain"), domain)
        self.assertIs(domain.document, document)
        self.assertIsNone(document.get_schema("Missing"))

    def test_document_without_components(self):
        document = OpenApiDocument({"openapi": "3.0.3"})
        self.assertEqual(document.schema_names(), [])

    def test_invalid_documents(self):
        with self.assertRaises(SchemaDocumentError):
            OpenApiDocument(["not", "a", "mapping"])
        with self.assertRaises(SchemaDocumentError):
            OpenApiDocument({"components": {"schemas": ["Post"]}})


class TestLoadDocument(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, content):
        path = os.path.join(self.temp_dir.name, "openapi.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_json_document(self):
        document = load_document(self._write('{"components": {"schemas": {"Post": {"type": "object"}}}}'))
        self.assertEqual(document.schema_names(), ["Post"])

    def test_missing_file(self):
        with self.assertRaises(SchemaDocumentError) as ctx:
            load_document(os.path.join(self.temp_dir.name, "missing.yaml"))
        self.assertIn("path", ctx.exception.context)

    def test_invalid_yaml(self):
        with self.assertRaises(SchemaDocumentError):
            load_document(self._write("components: {schemas: [\n"))

    def test_non_mapping_content(self):
        with self.assertRaises(SchemaDocumentError):
            load_document(self._write("- Post\n"))


class TestExceptions(unittest.TestCase):

    def test_hierarchy(self):
        for error_class in (ConfigurationError, SchemaDocumentError, StructuralDocumentError):
            self.assertTrue(issubclass(error_class, OpenApiDbGeneratorError))

    def test_formatted_message(self):
        error = StructuralDocumentError(
            "Junction table must reference exactly two other schemas",
            junction_schema="junction_PostTag",
            reference_count=0,
        )
        text = str(error)
        self.assertIn("Error Code: STRUCTURAL_DOCUMENT_ERROR", text)
        self.assertIn("junction_schema: junction_PostTag", text)
        self.assertIn("reference_count: 0", text)
        self.assertIn("Suggestions:", text)

    def test_custom_suggestions(self):
        error = SchemaDocumentError("Unresolvable reference", reference="#/x", suggestions=["Fix it"])
        self.assertEqual(error.suggestions, ["Fix it"])
        self.assertEqual(error.context, {"reference": "#/x"})


class TestColoredLogging(unittest.TestCase):

    def _record(self, message, level=logging.INFO):
        return logging.LogRecord("test", level, __file__, 1, message, None, None)

    def test_plain_output_without_colors(self):
        formatter = ColoredFormatter(use_colors=False)
        self.assertEqual(formatter.format(self._record("✓ done")), "INFO: ✓ done")

    def test_marker_colors(self):
        formatter = ColoredFormatter()
        formatter.use_colors = True
        self.assertTrue(formatter.format(self._record("→ working")).startswith(ColoredFormatter.MARKER_COLORS["→"]))
        self.assertTrue(
            formatter.format(self._record("oops", logging.ERROR)).startswith(ColoredFormatter.COLORS["ERROR"])
        )
        self.assertEqual(formatter.format(self._record("plain")), "INFO: plain")

    def test_setup_installs_single_handler(self):
        root_logger = logging.getLogger()
        saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
        try:
            setup_colored_logging(level=logging.DEBUG, use_colors=False)
            setup_colored_logging(level=logging.DEBUG, use_colors=False)
            self.assertEqual(len(root_logger.handlers), 1)
            self.assertIsInstance(root_logger.handlers[0].formatter, ColoredFormatter)
            self.assertEqual(root_logger.level, logging.DEBUG)
        finally:
            root_logger.handlers[:] = saved_handlers
            root_logger.setLevel(saved_level)

    def test_helpers_prefix_markers(self):
        logger = logging.getLogger("openapi_db_generator.tests")
        with self.assertLogs(logger, level="INFO") as logs:
            log_success(logger, "one")
            log_progress(logger, "two")
            log_highlight(logger, "three")
        self.assertEqual(
            [record.getMessage() for record in logs.records],
            ["✓ one", "→ two", "• three"],
        )


if __name__ == "__main__":
    unittest.main()
