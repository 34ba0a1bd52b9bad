"""Shared execution context and per-process scratch files."""

import logging
import secrets
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import httpx

from ..models.config import TargetConfig
from .target_client import DEFAULT_API_VERSION, make_target_request
from .templates import TemplateStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionContext:
    """Read-only bundle passed to every tool handler."""

    config: TargetConfig
    templates: TemplateStore
    temp_file_path: Path
    temp_css_path: Path
    transport: Optional[httpx.AsyncBaseTransport] = None

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        api_version: str = DEFAULT_API_VERSION,
    ) -> Any:
        """Issue one Admin API request with this context's configuration."""
        return await make_target_request(
            self.config, method, path, body, api_version, transport=self.transport
        )


class ScratchFiles:
    """Temp file paths shared by all tool calls for the lifetime of the process.

    The paths are generated on enter; whatever exists at those paths is
    removed on exit. Removal failures are logged and ignored.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or tempfile.gettempdir())
        self.session_id = secrets.token_hex(8)
        self.page_html = self.directory / f"at-mcp-page-analysis-{self.session_id}.html"
        self.page_css = self.directory / f"at-mcp-page-styles-{self.session_id}.css"

    def __enter__(self) -> "ScratchFiles":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        for label, path in (("HTML", self.page_html), ("CSS", self.page_css)):
            try:
                if path.exists():
                    path.unlink()
                    logger.info(f"Cleaned up {label} temp file")
            except OSError as e:
                logger.debug(f"Could not remove {path}: {e}")
