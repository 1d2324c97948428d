"""Companion component templates.

The sprite is consumed through ``<use href="#i-{name}">`` references. The
bundled ``icon.html.j2`` template wraps such a reference with the accessible
title and description markup; this module copies it into a project and can
also render it directly.
"""

import logging
from pathlib import Path

import jinja2

from icon_sprite.constants import COMPONENT_TEMPLATE_NAME, DEFAULT_ID_PREFIX
from icon_sprite.exceptions import (
    DestinationWriteError,
    TemplateMissingError,
    chain_exception,
)
from icon_sprite.models.config import ComponentConfig
from icon_sprite.utils import file_utils
from icon_sprite.utils.path_utils import path_resolver

logger = logging.getLogger(__name__)


def materialize_components(components: list[ComponentConfig]) -> list[Path]:
    """Copy component templates to their destinations.

    Args:
        components: Templates to copy; a missing source means the bundled one.

    Returns:
        Destination paths, in configuration order.

    Raises:
        TemplateMissingError: If a source template does not exist.
        DestinationWriteError: If a destination cannot be written.
    """
    written: list[Path] = []

    for component in components:
        source = component.source or path_resolver.get_template_path(COMPONENT_TEMPLATE_NAME)

        if not file_utils.file_exists(source):
            raise TemplateMissingError(
                "Component template not found",
                {"source": str(source), "destination": str(component.destination)},
            )

        try:
            file_utils.copy_file(source, component.destination)
        except OSError as e:
            raise chain_exception(
                DestinationWriteError(
                    "Failed to copy component template",
                    {"source": str(source), "destination": str(component.destination)},
                ),
                e,
            ) from e

        logger.info(f"Copied component template to {component.destination}")
        written.append(component.destination)

    return written


class IconRenderer:
    """Renders icon references with the component template."""

    def __init__(
        self,
        template_dir: Path | None = None,
        template_name: str = COMPONENT_TEMPLATE_NAME,
        prefix: str = DEFAULT_ID_PREFIX,
    ) -> None:
        """Initialize the renderer.

        Args:
            template_dir: Directory holding the template, the bundled one by default.
            template_name: Template filename.
            prefix: Symbol id prefix used by the sprite.
        """
        self.template_name = template_name
        self.prefix = prefix
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(template_dir or path_resolver.get_templates_dir()),
            autoescape=True,
        )

    def render(
        self,
        name: str,
        title: str | None = None,
        desc: str | None = None,
        css_class: str | None = None,
    ) -> str:
        """Render the markup for one icon.

        Args:
            name: Icon slug.
            title: Optional accessible title.
            desc: Optional accessible description.
            css_class: Optional extra CSS classes.

        Returns:
            An inline ``<svg>`` element referencing ``#{prefix}{name}``.

        Raises:
            TemplateMissingError: If the template cannot be loaded.
        """
        try:
            template = self.jinja_env.get_template(self.template_name)
        except jinja2.exceptions.TemplateNotFound as e:
            raise chain_exception(
                TemplateMissingError("Component template not found", {"template": str(e)}), e
            ) from e

        return template.render(
            name=name, title=title, desc=desc, css_class=css_class, prefix=self.prefix
        )


def render_icon(
    name: str,
    title: str | None = None,
    desc: str | None = None,
    css_class: str | None = None,
    prefix: str = DEFAULT_ID_PREFIX,
) -> str:
    """Render one icon with the bundled template.

    Args:
        name: Icon slug.
        title: Optional accessible title.
        desc: Optional accessible description.
        css_class: Optional extra CSS classes.
        prefix: Symbol id prefix used by the sprite.

    Returns:
        The rendered markup.
    """
    return IconRenderer(prefix=prefix).render(name, title=title, desc=desc, css_class=css_class)
