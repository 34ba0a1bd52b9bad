"""Configuration models for the Adobe Target MCP server."""

from __future__ import annotations
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class A4TDefaults(BaseModel):
    """Analytics for Target (A4T) defaults."""
    model_config = ConfigDict(frozen=True)

    data_collection_host: str = ""
    company_name: str = ""
    report_suites: List[str] = Field(default_factory=list)

    @property
    def enabled(self) -> bool:
        return bool(self.data_collection_host)


class ActivityDefaults(BaseModel):
    """Values filled into activities the caller left incomplete."""
    model_config = ConfigDict(frozen=True)

    mboxes: List[str] = Field(default_factory=lambda: ["target-global-mbox"])
    priority: int = Field(default=5, ge=0, le=999)
    visitor_percentage: int = Field(default=100, ge=0, le=100)

    # Success metrics
    metric_type: str = "engagement"  # "engagement" or "conversion"
    engagement_metric: str = "page_count"
    metric_action: str = "count_once"
    success_mbox: str = "orderConfirmPage"
    success_event: str = "mbox_shown"

    a4t: A4TDefaults = Field(default_factory=A4TDefaults)


class TargetConfig(BaseModel):
    """Immutable process-wide configuration handed to every tool call."""
    model_config = ConfigDict(frozen=True)

    tenant_id: str = ""
    api_key: str = ""
    access_token: str = ""
    workspace_id: str = ""
    defaults: ActivityDefaults = Field(default_factory=ActivityDefaults)

    @property
    def has_credentials(self) -> bool:
        """Check if all three Admin API credentials are set"""
        return bool(self.tenant_id and self.api_key and self.access_token)
