"""Loads LiveView templates from the views directory."""

from __future__ import annotations

import logging
import os
from typing import Any

from pyview.template.live_template import LiveRender, LiveTemplate
from pyview.vendor import ibis
from pyview.vendor.ibis.loaders import FileReloader

logger = logging.getLogger(__name__)

VIEWS_DIR = os.path.dirname(os.path.abspath(__file__))


def render_template(template_path: str, assigns: dict[str, Any], meta: Any) -> LiveRender:
    """Render a template relative to the views directory.

    On failure a minimal error template is rendered instead; LiveViews must
    always get a LiveRender back.
    """
    if not hasattr(ibis, "loader") or not isinstance(ibis.loader, FileReloader):
        ibis.loader = FileReloader(VIEWS_DIR)
    try:
        with open(os.path.join(VIEWS_DIR, template_path), encoding="utf-8") as f:
            template = ibis.Template(f.read())
        return LiveRender(LiveTemplate(template), assigns, meta)
    except Exception as e:
        logger.error(f"Error rendering template {template_path}: {e}", exc_info=True)
        error_template = ibis.Template("<div>Error rendering template: {{ error }}</div>")
        return LiveRender(LiveTemplate(error_template), {"error": str(e)}, meta)
