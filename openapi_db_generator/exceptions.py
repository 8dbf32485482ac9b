"""
Custom exception hierarchy for OpenAPI DB Generator.

This module provides an exception system with rich context and recovery
guidance. Only structural problems in the schema document are raised; schemas
that simply do not qualify for a table are skipped without an error.
"""

from typing import Dict, Any, Optional, List


class OpenApiDbGeneratorError(Exception):
    """
    Base exception for all OpenAPI DB Generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [self.message]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(OpenApiDbGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify option names (excludeModels, skipUnderscoredSchemas, generateModelsOnlyXTable)",
                "Check the option value types",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class SchemaDocumentError(OpenApiDbGeneratorError):
    """Raised when the schema document cannot be loaded or a reference cannot be followed."""

    def __init__(self, message: str, schema: str = None, reference: str = None, **kwargs):
        context = kwargs.get('context', {})
        if schema:
            context['schema'] = schema
        if reference:
            context['reference'] = reference

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check that the document is valid YAML or JSON",
                "Verify every $ref points into #/components/schemas",
                "Verify the referenced schema is defined",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="SCHEMA_DOCUMENT_ERROR"
        )


class StructuralDocumentError(OpenApiDbGeneratorError):
    """Raised when a junction schema does not link exactly two other schemas."""

    def __init__(
        self,
        message: str,
        junction_schema: str = None,
        reference_count: int = None,
        **kwargs
    ):
        context = kwargs.get('context', {})
        if junction_schema:
            context['junction_schema'] = junction_schema
        if reference_count is not None:
            context['reference_count'] = reference_count

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Give the junction schema exactly two $ref properties",
                "Add an array property with items.$ref to the junction on both related schemas",
                "Rename the schema if it is not meant to be a junction",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="STRUCTURAL_DOCUMENT_ERROR"
        )

