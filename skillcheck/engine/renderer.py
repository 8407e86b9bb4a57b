"""Chat card rendering with Jinja2 templates."""

from typing import Any, Optional, Protocol

from jinja2 import Environment, PackageLoader, select_autoescape


class ContentRenderer(Protocol):
    """Anything that renders a template id and data bag to a string."""

    def render(self, template_id: str, data: dict[str, Any]) -> str: ...


class TemplateRenderer:
    """Renders package templates from ``skillcheck/templates``."""

    def __init__(self, environment: Optional[Environment] = None) -> None:
        self._env = environment or Environment(
            loader=PackageLoader("skillcheck", "templates"),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_id: str, data: dict[str, Any]) -> str:
        """Render ``template_id`` with ``data``."""
        return self._env.get_template(template_id).render(**data)
