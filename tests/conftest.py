"""
Test configuration and shared fixtures for the Adobe Target MCP tests.

The Admin API is never contacted: requests go through an httpx MockTransport
that records every request and replays queued responses.
"""

import json
from typing import Any, List, Optional

import httpx
import pytest

from target_mcp.config import PACKAGE_TEMPLATES_DIR
from target_mcp.models.config import A4TDefaults, ActivityDefaults, TargetConfig
from target_mcp.services.context import ExecutionContext
from target_mcp.services.templates import TemplateStore


class FakeTargetAPI:
    """Records outgoing requests and answers them from a queue of canned responses."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[Any] = []
        self.transport = httpx.MockTransport(self._handle)

    def respond(self, status_code: int = 200, json_body: Any = None, text: Optional[str] = None) -> None:
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        elif json_body is not None:
            self._responses.append(httpx.Response(status_code, json=json_body))
        else:
            self._responses.append(httpx.Response(status_code))

    def fail(self, error: Exception) -> None:
        self._responses.append(error)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Any:
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def target_config():
    """Configuration with credentials and the stock defaults"""
    return TargetConfig(
        tenant_id="acme",
        api_key="api-key-1234",
        access_token="token-abcd",
        workspace_id="",
        defaults=ActivityDefaults(),
    )


@pytest.fixture
def conversion_config():
    """Configuration using conversion metrics, a workspace and A4T"""
    return TargetConfig(
        tenant_id="acme",
        api_key="api-key-1234",
        access_token="token-abcd",
        workspace_id="1234567",
        defaults=ActivityDefaults(
            mboxes=["home-hero", "pdp-hero"],
            priority=7,
            visitor_percentage=50,
            metric_type="conversion",
            success_mbox="orderConfirmPage",
            success_event="mbox_clicked",
            a4t=A4TDefaults(
                data_collection_host="acme.sc.omtrdc.net",
                company_name="Acme",
                report_suites=["acmeprod", "acmeglobal"],
            ),
        ),
    )


@pytest.fixture
def fake_api():
    return FakeTargetAPI()


@pytest.fixture
def make_context(tmp_path, fake_api):
    """Factory for execution contexts wired to the fake API"""
    templates = TemplateStore(PACKAGE_TEMPLATES_DIR)
    templates.load()

    def factory(config: TargetConfig) -> ExecutionContext:
        return ExecutionContext(
            config=config,
            templates=templates,
            temp_file_path=tmp_path / "page.html",
            temp_css_path=tmp_path / "page.css",
            transport=fake_api.transport,
        )
    return factory


@pytest.fixture
def context(make_context, target_config):
    return make_context(target_config)
