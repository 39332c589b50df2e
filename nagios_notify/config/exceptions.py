"""Custom exceptions for configuration management."""

from typing import List, Optional


class ConfigurationError(Exception):
    """
    Exception raised when the configuration file cannot be loaded or validated.

    Stores the individual validation errors plus suggestions and renders them
    as a single human-readable message.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Primary error message
            errors: List of specific validation errors
            suggestions: List of helpful suggestions to fix the errors
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.errors:
            parts.append("\nValidation Errors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)
