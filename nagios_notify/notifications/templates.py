"""Template rendering for the notification body using Jinja2.

The body template is an operator-supplied text file, looked up by name in a
template directory. Strict undefined checking turns typos in the template
into errors instead of blank text.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from .models import TemplateLoadError, TemplateRenderError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_NAME = "template.txt"


class TemplateRenderer:
    """Renders the plain text body from a template on disk."""

    def __init__(
        self,
        template_dir: Union[str, Path] = ".",
        template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        """Initialize the Jinja2 environment.

        Args:
            template_dir: Directory searched for the template
            template_name: File name of the body template
        """
        self.template_dir = Path(template_dir)
        self.template_name = template_name

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir), encoding="utf-8"),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

        logger.debug(f"Initialized TemplateRenderer with templates from {self.template_dir}")

    def load(self):
        """Load and compile the body template.

        Raises:
            TemplateLoadError: If the template is missing or has invalid syntax
        """
        try:
            return self.env.get_template(self.template_name)
        except TemplateNotFound as e:
            raise TemplateLoadError(
                f"Template '{self.template_name}' not found in {self.template_dir}"
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateLoadError(
                f"Template syntax error in {e.filename or self.template_name} line {e.lineno}: {e.message}"
            ) from e
        except (TemplateError, OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(f"Failed to load template '{self.template_name}': {e}") from e

    def render(self, context: Dict[str, Any]) -> str:
        """Render the body template with the provided context.

        Args:
            context: Dictionary of template variables

        Returns:
            Rendered body text

        Raises:
            TemplateLoadError: If the template cannot be loaded
            TemplateRenderError: If rendering fails (e.g. undefined variable)
        """
        template = self.load()

        try:
            body = template.render(context)
        except TemplateError as e:
            raise TemplateRenderError(f"Template rendering failed: {e}") from e
        except Exception as e:
            raise TemplateRenderError(f"Unexpected error during template rendering: {e}") from e

        logger.debug(f"Rendered template {self.template_name} ({len(body)} chars)")
        return body
