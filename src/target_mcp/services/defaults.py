"""Default values for activities and their parts.

Caller-supplied values always win. Scalar fields such as ``priority`` count as
missing only when the key is absent, so explicit ``None`` and ``0`` are kept.
Workspace, analytics fields, actions and mbox lists are filled when empty.
Merging never mutates the caller's object and is idempotent.
"""

import copy
from typing import Any, Dict, List, Optional

from ..models.config import TargetConfig


def _missing(mapping: Dict[str, Any], key: str) -> bool:
    return key not in mapping


def get_default_locations(config: TargetConfig, starting_local_id: int = 0) -> List[Dict[str, Any]]:
    """Mbox locations for every configured default mbox."""
    return [
        {"locationLocalId": starting_local_id + index, "name": name, "audienceIds": []}
        for index, name in enumerate(config.defaults.mboxes)
    ]


def get_default_a4t_config(config: TargetConfig) -> Optional[Dict[str, Any]]:
    """Analytics block for A4T, or None when A4T is not configured."""
    a4t = config.defaults.a4t
    if not a4t.data_collection_host or not a4t.report_suites:
        return None
    return {
        "dataCollectionHost": a4t.data_collection_host,
        "reportSuites": _report_suites(config),
    }


def get_default_metric(config: TargetConfig, metric_local_id: int, metric_name: str) -> Dict[str, Any]:
    """A success metric built entirely from configured defaults."""
    defaults = config.defaults
    metric: Dict[str, Any] = {
        "metricLocalId": metric_local_id,
        "name": metric_name,
        "conversion": defaults.metric_type == "conversion",
        "action": {"type": defaults.metric_action},
    }
    if defaults.metric_type == "engagement":
        metric["engagement"] = defaults.engagement_metric
    if defaults.metric_type == "conversion":
        metric["mboxes"] = [_default_success_mbox(config)]
    return metric


def get_default_entry_constraint(config: TargetConfig) -> Dict[str, Any]:
    return {
        "mboxes": _entry_mboxes(config),
        "visitorPercentage": config.defaults.visitor_percentage,
    }


def apply_activity_defaults(activity: Dict[str, Any], config: TargetConfig) -> Dict[str, Any]:
    """Return a copy of ``activity`` with missing fields filled from config defaults."""
    defaults = config.defaults
    merged = copy.deepcopy(activity)

    if _missing(merged, "priority"):
        merged["priority"] = defaults.priority

    if not merged.get("workspace") and config.workspace_id:
        merged["workspace"] = config.workspace_id

    locations = merged.get("locations")
    if locations is None:
        locations = merged["locations"] = {}
    if not locations.get("mboxes"):
        locations["mboxes"] = get_default_locations(config)

    analytics = merged.get("analytics")
    if analytics is not None and defaults.a4t.data_collection_host:
        if not analytics.get("dataCollectionHost"):
            analytics["dataCollectionHost"] = defaults.a4t.data_collection_host
        if not analytics.get("reportSuites") and defaults.a4t.report_suites:
            analytics["reportSuites"] = _report_suites(config)

    metrics = merged.get("metrics")
    if isinstance(metrics, list):
        merged["metrics"] = [_apply_metric_defaults(metric, config) for metric in metrics]
    else:
        merged["metrics"] = [get_default_metric(config, 0, "Primary Goal")]

    entry_constraint = merged.get("entryConstraint")
    if entry_constraint is not None:
        if _missing(entry_constraint, "visitorPercentage"):
            entry_constraint["visitorPercentage"] = defaults.visitor_percentage
        if not entry_constraint.get("mboxes"):
            entry_constraint["mboxes"] = _entry_mboxes(config)

    return merged


def _apply_metric_defaults(metric: Dict[str, Any], config: TargetConfig) -> Dict[str, Any]:
    defaults = config.defaults

    if _missing(metric, "conversion"):
        metric["conversion"] = defaults.metric_type == "conversion"

    if _missing(metric, "engagement") and defaults.metric_type == "engagement":
        metric["engagement"] = defaults.engagement_metric

    action = metric.get("action")
    if not action:
        metric["action"] = {"type": defaults.metric_action}
    elif not action.get("type"):
        action["type"] = defaults.metric_action

    if metric["conversion"] and metric.get("mboxes"):
        metric["mboxes"] = [
            {
                "name": mbox.get("name") or defaults.success_mbox,
                "successEvent": mbox.get("successEvent") or defaults.success_event,
                "audienceIds": mbox.get("audienceIds") or [],
            }
            for mbox in metric["mboxes"]
        ]

    return metric


def _default_success_mbox(config: TargetConfig) -> Dict[str, Any]:
    return {
        "name": config.defaults.success_mbox,
        "successEvent": config.defaults.success_event,
        "audienceIds": [],
    }


def _entry_mboxes(config: TargetConfig) -> List[Dict[str, Any]]:
    return [{"name": name, "audienceIds": []} for name in config.defaults.mboxes]


def _report_suites(config: TargetConfig) -> List[Dict[str, Any]]:
    a4t = config.defaults.a4t
    return [{"companyName": a4t.company_name, "reportSuites": list(a4t.report_suites)}]
