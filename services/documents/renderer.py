"""
Jinja2 renderer for the booking text documents.

Templates live in services/documents/templates/ and are plain text, so
autoescaping is off and undefined variables are an error rather than an
empty string.
"""

import logging
from pathlib import Path
from typing import Dict, Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from utils.jinja_filters import register_filters

logger = logging.getLogger(__name__)

# Template directory for file-based templates
TEMPLATES_DIR = Path(__file__).parent / "templates"

CLIENT_CONFIRMATION_TEMPLATE = "client_confirmation.txt.j2"
SUPPLIER_ORDER_TEMPLATE = "supplier_order.txt.j2"


class DocumentTemplateRenderer:
    """Renders the client confirmation and supplier order templates."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR):
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )
        register_filters(self._env)

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a file-based template.

        Args:
            template_name: Template filename (e.g., 'supplier_order.txt.j2')
            context: Template variables

        Returns:
            Rendered text
        """
        template = self._env.get_template(template_name)
        return template.render(**context)

    def render_client_confirmation(self, context: Dict[str, Any]) -> str:
        return self.render(CLIENT_CONFIRMATION_TEMPLATE, context)

    def render_supplier_order(self, context: Dict[str, Any]) -> str:
        return self.render(SUPPLIER_ORDER_TEMPLATE, context)
