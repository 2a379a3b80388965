"""Template rendering service using Jinja2.

This module renders the ``whyRecommended`` explanation attached to every
recommendation. Templates are rendered with StrictUndefined to catch
missing variables early. Output is plain text for JSON responses, so
autoescaping is off.
"""

from typing import Optional
from jinja2 import Environment, BaseLoader, StrictUndefined, TemplateError

from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


PLANT_EXPLANATION_TEMPLATE = (
    "Suits your "
    "{% for criterion in criteria %}"
    "{{ criterion.label }} ({{ criterion.value }})"
    "{% if not loop.last %}{% if loop.revindex == 2 %} and {% else %}, {% endif %}{% endif %}"
    "{% endfor %}"
)

PARTNER_EXPLANATION_TEMPLATE = (
    "Matched rule '{{ rule_name }}'"
    "{% if speciality %}: specialises in {{ speciality }}{% endif %}"
    "{% if location %}, serves {{ location }}{% endif %}"
)


class TemplateRenderError(Exception):
    """Raised when template rendering fails."""
    pass


class TemplateRenderer:
    """Service for rendering Jinja2 explanation templates."""

    def __init__(self):
        """Initialize Jinja2 environment with strict settings."""
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            undefined=StrictUndefined,  # Raise error on undefined variables
        )

    def render(self, template_text: str, context: dict) -> str:
        """Render template with context variables.

        Args:
            template_text: Template string with Jinja2 syntax
            context: Dictionary of variables for template

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If template is invalid or variables are missing

        Example:
            >>> renderer = TemplateRenderer()
            >>> renderer.render(PARTNER_EXPLANATION_TEMPLATE, {
            ...     "rule_name": "Aesthetic gardens", "speciality": "Landscaping", "location": None})
            "Matched rule 'Aesthetic gardens': specialises in Landscaping"
        """
        try:
            template = self.env.from_string(template_text)
            return template.render(context)
        except TemplateError as e:
            logger.error(f"Template rendering error: {e}")
            raise TemplateRenderError(f"Failed to render template: {e}")


# Global singleton instance
_renderer_instance: Optional[TemplateRenderer] = None


def get_template_renderer() -> TemplateRenderer:
    """Get global TemplateRenderer instance.

    Returns:
        Global TemplateRenderer instance
    """
    global _renderer_instance
    if _renderer_instance is None:
        _renderer_instance = TemplateRenderer()
    return _renderer_instance
