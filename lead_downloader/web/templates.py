"""Template rendering for the HTML front page using Jinja2."""

import logging
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

logger = logging.getLogger(__name__)


class PageRenderError(Exception):
    """Raised when the front page template fails to render."""

    pass


class TemplateRenderer:
    """Renders HTML pages from templates in the lead_downloader.web package.

    Templates are cached by the Jinja2 environment after first load.
    """

    def __init__(self, template_dir: str = "templates", index_template: str = "index.html.j2"):
        """Initialize template renderer with Jinja2 environment.

        Args:
            template_dir: Directory name within the lead_downloader.web package
            index_template: Filename of the front page template
        """
        self.index_template_name = index_template
        self.env = Environment(
            loader=PackageLoader("lead_downloader.web", template_dir),
            autoescape=True,
            undefined=StrictUndefined,
        )

    def render_index(self, context: Dict[str, Any]) -> str:
        """Render the search page.

        Args:
            context: Template variables (title, form defaults and limits)

        Returns:
            Rendered HTML document

        Raises:
            PageRenderError: If template rendering fails
        """
        try:
            return self.env.get_template(self.index_template_name).render(context)
        except TemplateError as e:
            logger.error(
                f"Template rendering failed: {e}",
                extra={"event": "web.template.error", "template": self.index_template_name},
                exc_info=True,
            )
            raise PageRenderError(f"Template rendering failed: {e}") from e
