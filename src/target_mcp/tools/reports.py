"""Report tools: raw activity reports and a summarized insights view."""

import logging
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..models.tool import ToolArguments, define_tool
from ..services.context import ExecutionContext
from .common import with_report_interval

logger = logging.getLogger(__name__)

_REPORT_INTERVAL_DESCRIPTION = (
    'Optional date range in ISO 8601 format (e.g., "2024-01-01T00:00-07:00/2024-02-01T00:00-07:00")'
)

# Activity types whose performance report the insights tool understands
ACTIVITY_TYPES: Dict[str, Dict[str, str]] = {
    "ab": {
        "name": "A/B Test",
        "description": "Randomly splits traffic between experiences to test which performs best",
        "comparisonNote": "Experiences are randomly distributed - comparing statistical performance",
    },
    "xt": {
        "name": "Experience Targeting",
        "description": "Shows different experiences to different audience segments",
        "comparisonNote": "Experiences are targeted to specific audiences - not random distribution",
    },
    "abt": {
        "name": "Automated Personalization",
        "description": "Uses machine learning to automatically show the best experience to each visitor",
        "comparisonNote": "Algorithm-driven personalization - performance varies by visitor attributes",
    },
}


class ActivityReportArguments(ToolArguments):
    id: int = Field(..., description="Activity ID")
    report_interval: Optional[str] = Field(
        default=None, alias="reportInterval", description=_REPORT_INTERVAL_DESCRIPTION
    )


class ActivityInsightsArguments(ToolArguments):
    activity_name: str = Field(..., alias="activityName", description="Name of the activity (can be partial match)")
    report_interval: Optional[str] = Field(
        default=None, alias="reportInterval", description=_REPORT_INTERVAL_DESCRIPTION
    )
    qa_url: Optional[str] = Field(
        default=None,
        alias="qaUrl",
        description="Optional page URL used to generate QA preview links for each experience",
    )


async def get_ab_performance_report(args: ActivityReportArguments, context: ExecutionContext) -> Any:
    path = with_report_interval(f"/target/activities/ab/{args.id}/report/performance", args.report_interval)
    return await context.request("GET", path, api_version="v1")


async def get_apt_performance_report(args: ActivityReportArguments, context: ExecutionContext) -> Any:
    path = with_report_interval(f"/target/activities/abt/{args.id}/report/performance", args.report_interval)
    return await context.request("GET", path, api_version="v1")


async def get_xt_orders_report(args: ActivityReportArguments, context: ExecutionContext) -> Any:
    path = with_report_interval(f"/target/activities/xt/{args.id}/report/orders", args.report_interval)
    return await context.request("GET", path, api_version="v1")


def conversion_rate(entries: int, conversions: int) -> float:
    if entries == 0:
        return 0.0
    return conversions / entries * 100


def lift(control_rate: float, variant_rate: float) -> float:
    if control_rate == 0:
        return 0.0
    return (variant_rate - control_rate) / control_rate * 100


def activity_type_info(activity_type: str) -> Dict[str, str]:
    return ACTIVITY_TYPES.get(activity_type, {
        "name": activity_type.upper(),
        "description": "Unknown activity type",
        "comparisonNote": "Performance comparison",
    })


def _visitor_totals(stats: Dict[str, Any]) -> Dict[str, Any]:
    return stats["totals"]["visitor"]["totals"]


def format_experience_comparison(
    experiences: List[Dict[str, Any]],
    statistics: Dict[str, Any],
    activity_type: str,
    qa_links: Optional[List[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """Per-experience metrics; A/B tests also get lift against the first (control) experience."""
    has_control = activity_type == "ab"
    control = _visitor_totals(statistics["experiences"][0])
    control_rate = conversion_rate(control["entries"], control["conversions"])

    comparisons = []
    for idx, experience in enumerate(experiences):
        stats = statistics["experiences"][idx]
        visitor = _visitor_totals(stats)
        rate = conversion_rate(visitor["entries"], visitor["conversions"])

        comparison: Dict[str, Any] = {
            "experienceName": experience.get("name") or f"Experience {chr(65 + idx)}",
            "experienceId": experience.get("experienceLocalId"),
            "isControl": has_control and idx == 0,
            "metrics": {
                "visitors": visitor["entries"],
                "conversions": visitor["conversions"],
                "conversionRate": f"{rate:.2f}%",
                "visits": stats["totals"]["visit"]["totals"]["entries"],
                "impressions": stats["totals"]["impression"]["totals"]["entries"],
                "landings": stats["totals"]["landing"]["totals"]["entries"],
            },
        }

        if has_control and idx > 0:
            experience_lift = lift(control_rate, rate)
            comparison["performance"] = {"lift": f"{experience_lift:.2f}%", "isWinning": experience_lift > 0}

        if qa_links:
            for qa_link in qa_links:
                if qa_link.get("experienceLocalId") == experience.get("experienceLocalId"):
                    comparison["qaUrl"] = qa_link.get("url")
                    break

        comparisons.append(comparison)

    return comparisons


def _rate(comparison: Dict[str, Any]) -> float:
    return float(comparison["metrics"]["conversionRate"].rstrip("%"))


def generate_insights(comparisons: List[Dict[str, Any]], activity: Dict[str, Any]) -> Dict[str, Any]:
    """Type-aware observations and recommendations for an activity's experiences."""
    insights: List[str] = []
    recommendations: List[str] = []
    activity_type = activity.get("type", "")
    type_info = activity_type_info(activity_type)

    insights.append(f"Activity Type: {type_info['name']}")
    insights.append(type_info["description"])

    by_conversion = sorted(comparisons, key=_rate, reverse=True)
    winner = by_conversion[0]
    control = comparisons[0]
    total_visitors = sum(c["metrics"]["visitors"] for c in comparisons)

    if activity_type == "ab":
        if len(comparisons) == 1:
            insights.append("Only one experience found. A/B tests typically have 2+ experiences to compare.")
            recommendations.append("Add additional experiences (variants) to test against the control.")
        else:
            if winner["experienceId"] != control["experienceId"]:
                insights.append(
                    f"Winner: {winner['experienceName']} with {winner['metrics']['conversionRate']} "
                    f"conversion rate ({winner['performance']['lift']} lift)"
                )
                if total_visitors >= 1000:
                    recommendations.append(
                        f"Strong results with {total_visitors} visitors. "
                        f"Consider implementing {winner['experienceName']} site-wide."
                    )
                elif total_visitors >= 100:
                    recommendations.append(
                        f"Promising trend with {total_visitors} visitors. "
                        "Continue testing to confirm statistical significance."
                    )
            else:
                insights.append(f"The control ({control['experienceName']}) is currently the best performer.")
                insights.append("Variants are not outperforming the control.")
                recommendations.append("Consider testing more aggressive variations or different hypotheses.")

            average = total_visitors / len(comparisons)
            imbalanced = any(abs(c["metrics"]["visitors"] - average) > average * 0.2 for c in comparisons)
            if imbalanced and total_visitors > 100:
                insights.append("Traffic split is uneven across experiences.")
                recommendations.append(
                    "Verify traffic allocation settings (should typically be 50/50 or evenly split)."
                )

    elif activity_type == "xt":
        insights.append(f"Note: {type_info['comparisonNote']}")
        if len(comparisons) == 1:
            insights.append(
                "Only one experience found. XT activities typically target multiple audience segments."
            )
            recommendations.append(
                "Add experiences targeted to different audience segments to maximize personalization."
            )
        else:
            insights.append(f"{len(comparisons)} targeted experiences are active.")
            for c in comparisons:
                if c["metrics"]["visitors"] > 0:
                    insights.append(
                        f"  - {c['experienceName']}: {c['metrics']['conversionRate']} conversion rate "
                        f"({c['metrics']['visitors']} visitors)"
                    )
            recommendations.append(
                "For XT activities, focus on whether each targeted audience is converting, "
                "not just lift comparisons."
            )
            if any(c["metrics"]["visitors"] == 0 for c in comparisons):
                recommendations.append(
                    "Some experiences have no visitors. Verify audience targeting rules are configured correctly."
                )

    elif activity_type == "abt":
        insights.append(type_info["comparisonNote"])
        insights.append(f"The algorithm is testing {len(comparisons)} experiences.")
        if total_visitors < 1000:
            insights.append(
                "AP activities require substantial traffic (1000+ visitors) for the algorithm to learn effectively."
            )
            recommendations.append("Allow more time for the machine learning algorithm to optimize performance.")
        else:
            insights.append(f"Sufficient traffic ({total_visitors} visitors) for algorithm optimization.")
            insights.append("Top performing experiences:")
            for rank, c in enumerate(by_conversion[:3], start=1):
                insights.append(
                    f"  {rank}. {c['experienceName']}: {c['metrics']['conversionRate']} "
                    f"({c['metrics']['visitors']} visitors)"
                )

    if total_visitors < 100:
        insights.append(
            f"Low traffic detected: Only {total_visitors} total visitors. "
            "Results may not be statistically significant."
        )
        recommendations.append("Continue running the activity to gather more data before making decisions.")

    if not any(c["metrics"]["conversions"] > 0 for c in comparisons):
        insights.append("No conversions recorded yet for any experience.")
        recommendations.append("Verify that conversion tracking is properly configured.")
        recommendations.append(
            "Check that visitors are reaching the conversion goal (e.g., checkout, form submission)."
        )

    state = activity.get("state")
    if state == "saved":
        insights.append("Activity Status: SAVED (not running)")
        recommendations.append("Activate the activity to start collecting meaningful data.")
    elif state == "deactivated":
        insights.append("Activity Status: DEACTIVATED")
        recommendations.append("Activity is deactivated. No new data is being collected.")
    elif state == "approved":
        insights.append("Activity Status: APPROVED (running)")

    return {"insights": insights, "recommendations": recommendations, "typeInfo": type_info}


async def _fetch_qa_links(activity: Dict[str, Any], qa_url: str, context: ExecutionContext) -> Optional[List[Dict[str, Any]]]:
    """QA preview links per experience; failures are logged and yield None."""
    path = f"/target/activities/{activity['type']}/{activity['id']}/qamode"
    body = {
        "url": qa_url,
        "currentActivityOnly": False,
        "audienceIdsEvaluatedAsTrue": [],
        "audienceIdsEvaluatedAsFalse": [],
    }
    try:
        response = await context.request("POST", path, body)
    except Exception as e:
        logger.warning(f"Failed to retrieve QA links: {e}")
        return None
    return response.get("qaModeExperiences") or None


async def get_activity_insights(args: ActivityInsightsArguments, context: ExecutionContext) -> Dict[str, Any]:
    try:
        listing = await context.request("GET", "/target/activities", api_version="v3")
        activities = listing.get("activities") or []
        if not activities:
            return {"success": False, "error": "No activities found in your Target account."}

        search_term = args.activity_name.lower()
        matches = [a for a in activities if search_term in (a.get("name") or "").lower()]

        if not matches:
            return {
                "success": False,
                "error": f'No activity found matching "{args.activity_name}".',
                "suggestion": "Try a different search term or check the activity name.",
            }

        if len(matches) > 1:
            return {
                "success": False,
                "error": (
                    f'Found {len(matches)} activities matching "{args.activity_name}". '
                    "Please be more specific."
                ),
                "matchingActivities": [
                    {"id": a.get("id"), "name": a.get("name"), "type": a.get("type"), "state": a.get("state")}
                    for a in matches
                ],
            }

        activity = matches[0]
        activity_type = activity.get("type")
        if activity_type not in ACTIVITY_TYPES:
            return {
                "success": False,
                "error": f'Activity type "{activity_type}" does not support performance reporting.',
                "supportedTypes": list(ACTIVITY_TYPES),
            }

        report_path = with_report_interval(
            f"/target/activities/{activity_type}/{activity['id']}/report/performance", args.report_interval
        )
        report = await context.request("GET", report_path, api_version="v1")

        qa_links = await _fetch_qa_links(activity, args.qa_url, context) if args.qa_url else None

        statistics = report["report"]["statistics"]
        comparisons = format_experience_comparison(
            report["activity"]["experiences"], statistics, activity_type, qa_links
        )
        analysis = generate_insights(comparisons, activity)
        type_info = analysis["typeInfo"]
        totals = statistics["totals"]

        return {
            "success": True,
            "activity": {
                "id": activity.get("id"),
                "name": activity.get("name"),
                "type": activity_type,
                "typeDisplay": type_info["name"],
                "typeDescription": type_info["description"],
                "state": activity.get("state"),
                "priority": activity.get("priority"),
                "modifiedAt": activity.get("modifiedAt"),
            },
            "reportPeriod": report.get("reportParameters", {}).get("reportInterval"),
            "summary": {
                "totalVisitors": totals["visitor"]["totals"]["entries"],
                "totalConversions": totals["visitor"]["totals"]["conversions"],
                "totalVisits": totals["visit"]["totals"]["entries"],
                "totalImpressions": totals["impression"]["totals"]["entries"],
            },
            "experienceComparisons": comparisons,
            "insights": analysis["insights"],
            "recommendations": analysis["recommendations"],
        }
    except Exception as e:
        logger.warning(f"Activity insights failed: {e}")
        return {"success": False, "error": str(e)}


TOOLS = [
    define_tool(
        "getABPerformanceReport",
        "Get performance report for an A/B Test activity with metrics, conversions, and visitor data",
        get_ab_performance_report,
        ActivityReportArguments,
    ),
    define_tool(
        "getAPTPerformanceReport",
        (
            "Get performance report for an Automated Personalization Test (APT) activity with metrics, "
            "conversions, and visitor data"
        ),
        get_apt_performance_report,
        ActivityReportArguments,
    ),
    define_tool(
        "getXTOrdersReport",
        (
            "Get orders report data for an Experience Targeting (XT) activity, including conversion "
            "metrics and order information"
        ),
        get_xt_orders_report,
        ActivityReportArguments,
    ),
    define_tool(
        "getActivityInsights",
        (
            "Search for an activity by name and get a performance comparison of all experiences with "
            "insights and recommendations. No activity ID needed."
        ),
        get_activity_insights,
        ActivityInsightsArguments,
    ),
]
