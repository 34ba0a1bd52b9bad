"""Offer templates exposed as MCP resources (template://{html|json}/{name})."""

import logging
import re
from pathlib import Path
from typing import Dict, List

from .error_handler import InvalidTemplateURIError, TemplateNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_KINDS = ("html", "json")
TEMPLATE_MIME_TYPE = "application/json"
_URI_PATTERN = re.compile(r"^template://(html|json)/(.+)$")

# Used when the templates directory cannot be read
FALLBACK_TEMPLATES: Dict[str, List[str]] = {
    "html": [
        "accordion", "carousel", "countdown-timer", "cta-button", "form-field",
        "hero-banner", "modal", "notification-banner", "sticky-header", "tabs",
    ],
    "json": [
        "ab-test-variant", "feature-flags", "form-config", "hero-config",
        "navigation-menu", "personalization-content", "pricing-data",
        "product-recommendations", "testimonials",
    ],
}


def template_uri(kind: str, name: str) -> str:
    return f"template://{kind}/{name}"


class TemplateStore:
    """Lists and reads template files stored as <templates_dir>/<kind>/<name>.json"""

    def __init__(self, templates_dir: Path):
        self.templates_dir = Path(templates_dir)
        self.templates: Dict[str, List[str]] = {kind: [] for kind in TEMPLATE_KINDS}

    def load(self) -> Dict[str, List[str]]:
        """Scan the templates directory once and cache the template names."""
        templates: Dict[str, List[str]] = {kind: [] for kind in TEMPLATE_KINDS}
        try:
            for kind in TEMPLATE_KINDS:
                kind_dir = self.templates_dir / kind
                if kind_dir.is_dir():
                    templates[kind] = sorted(p.stem for p in kind_dir.iterdir() if p.suffix == ".json")
                    logger.info(f"Loaded {len(templates[kind])} {kind.upper()} templates")
        except OSError as e:
            logger.error(f"Error loading templates: {e}")
            logger.error("Using fallback template list")
            templates = {kind: list(names) for kind, names in FALLBACK_TEMPLATES.items()}

        self.templates = templates
        return templates

    @property
    def total(self) -> int:
        return sum(len(names) for names in self.templates.values())

    def list_resources(self) -> List[Dict[str, str]]:
        """Resource descriptors for every cached template, HTML first."""
        resources = []
        for kind in TEMPLATE_KINDS:
            label = kind.upper()
            for name in self.templates[kind]:
                resources.append({
                    "uri": template_uri(kind, name),
                    "name": f"{label} Template: {name}",
                    "description": f"Adobe Target {label} offer template",
                    "mimeType": TEMPLATE_MIME_TYPE,
                })
        return resources

    def read(self, uri: str) -> str:
        """Return the raw JSON text of a template.

        Raises:
            InvalidTemplateURIError: If the URI is not template://html/<name> or template://json/<name>
            TemplateNotFoundError: If no file backs the URI
        """
        match = _URI_PATTERN.match(uri)
        if not match:
            raise InvalidTemplateURIError(uri)

        kind, name = match.groups()
        kind_dir = (self.templates_dir / kind).resolve()
        file_path = (kind_dir / f"{name}.json").resolve()
        if file_path.parent != kind_dir or not file_path.is_file():
            raise TemplateNotFoundError(uri)

        return file_path.read_text(encoding="utf-8")
