"""Configuration management for the Adobe Target MCP server"""

import logging
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.config import A4TDefaults, ActivityDefaults, TargetConfig

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def split_csv(value: str) -> list[str]:
    """Split a comma-separated environment value, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def mask_secret(value: str) -> str:
    """Mask all but the last four characters of a credential."""
    if not value:
        return "NOT SET"
    return "***" + value[-4:]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Authentication
    tenant_id: str = ""
    api_key: str = ""
    access_token: str = ""
    workspace_id: str = ""

    # Activity defaults
    default_mboxes: str = "target-global-mbox"
    default_priority: int = 5
    default_visitor_percentage: int = 100
    default_metric_type: str = "engagement"
    default_engagement_metric: str = "page_count"
    default_metric_action: str = "count_once"
    default_success_mbox: str = "orderConfirmPage"
    default_success_event: str = "mbox_shown"

    # Analytics for Target
    a4t_data_collection_host: str = ""
    a4t_company_name: str = ""
    a4t_report_suites: str = ""

    # Server settings
    templates_dir: str = str(PACKAGE_TEMPLATES_DIR)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TARGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    def to_config(self) -> TargetConfig:
        """Build the immutable configuration handed to tool handlers."""
        mboxes = split_csv(self.default_mboxes) or ["target-global-mbox"]
        return TargetConfig(
            tenant_id=self.tenant_id,
            api_key=self.api_key,
            access_token=self.access_token,
            workspace_id=self.workspace_id,
            defaults=ActivityDefaults(
                mboxes=mboxes,
                priority=self.default_priority,
                visitor_percentage=self.default_visitor_percentage,
                metric_type=self.default_metric_type,
                engagement_metric=self.default_engagement_metric,
                metric_action=self.default_metric_action,
                success_mbox=self.default_success_mbox,
                success_event=self.default_success_event,
                a4t=A4TDefaults(
                    data_collection_host=self.a4t_data_collection_host,
                    company_name=self.a4t_company_name,
                    report_suites=split_csv(self.a4t_report_suites),
                ),
            ),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, loading it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def get_config() -> TargetConfig:
    """Get the process-wide Target configuration."""
    return get_settings().to_config()


def log_config_summary(config: TargetConfig) -> None:
    """Log a masked summary of the loaded configuration."""
    logger.info(f"Tenant ID: {config.tenant_id or 'NOT SET'}")
    logger.info(f"API Key: {mask_secret(config.api_key)}")
    logger.info(f"Access Token: {mask_secret(config.access_token)}")
    logger.info(f"Workspace ID: {config.workspace_id or 'ALL WORKSPACES'}")
    logger.info(f"Default Mboxes: {', '.join(config.defaults.mboxes)}")
    logger.info(f"Default Priority: {config.defaults.priority}")
    if config.defaults.a4t.enabled:
        logger.info(f"A4T Enabled: {', '.join(config.defaults.a4t.report_suites)}")
    if not config.has_credentials:
        logger.warning("Admin API credentials incomplete; every tool call will fail until they are set")
