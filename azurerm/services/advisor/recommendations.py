"""
Data source: azurerm_advisor_recommendations

Lists Azure Advisor recommendations for the subscription, optionally
narrowed to some categories and resource groups.

Filter Format:
    (Category eq 'Cost' or Category eq 'Security') and (ResourceGroup eq 'rg1')
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional

from azure.core.exceptions import HttpResponseError

from azurerm.core.exceptions import ProviderError
from azurerm.core.schema import Resource, Schema, ValueType
from azurerm.core.timeouts import ResourceTimeout
from azurerm.helpers import azure, validate
from azurerm.helpers.utils import enum_value

logger = logging.getLogger(__name__)

CATEGORIES = [
    "HighAvailability",
    "Security",
    "Performance",
    "Cost",
    "OperationalExcellence",
]


def data_source_advisor_recommendations() -> Resource:
    return Resource(
        type_name="azurerm_advisor_recommendations",
        read=read_advisor_recommendations,
        timeouts=ResourceTimeout(read=timedelta(minutes=10)),
        schema={
            "filter_by_category": Schema(
                ValueType.SET,
                optional=True,
                elem=Schema(
                    ValueType.STRING,
                    validate_func=validate.string_in_slice(CATEGORIES, ignore_case=True),
                ),
            ),
            "filter_by_resource_groups": azure.schema_resource_group_name_set_optional(),
            "recommendations": Schema(
                ValueType.LIST,
                computed=True,
                elem=Resource(schema={
                    "category": Schema(ValueType.STRING, computed=True),
                    "description": Schema(ValueType.STRING, computed=True),
                    "impact": Schema(ValueType.STRING, computed=True),
                    "recommendation_name": Schema(ValueType.STRING, computed=True),
                    "recommendation_type_id": Schema(ValueType.STRING, computed=True),
                    "resource_name": Schema(ValueType.STRING, computed=True),
                    "resource_type": Schema(ValueType.STRING, computed=True),
                    "suppression_names": Schema(
                        ValueType.SET,
                        computed=True,
                        elem=Schema(ValueType.STRING),
                    ),
                    "updated_time": Schema(ValueType.STRING, computed=True),
                }),
            ),
        },
    )


def read_advisor_recommendations(d, meta) -> None:
    client = meta.client.advisor.recommendations

    filter_list = []
    categories = expand_filter("Category", d.get("filter_by_category"))
    if categories:
        filter_list.append(categories)
    resource_groups = expand_filter("ResourceGroup", d.get("filter_by_resource_groups"))
    if resource_groups:
        filter_list.append(resource_groups)
    filter_expr = " and ".join(filter_list)

    logger.debug(f"Listing Advisor recommendations (filter: {filter_expr!r})")
    recommends = []
    try:
        for item in client.list(filter=filter_expr or None):
            if not item.name:
                raise ProviderError("advisor Recommendation Name was nil or empty")
            recommends.append(item)
    except HttpResponseError as e:
        raise ProviderError(f"loading Advisor Recommendation List: {e}") from e

    logger.info(f"✓ Found {len(recommends)} Advisor recommendations")
    d.set("recommendations", flatten_recommendations(recommends))

    d.set_id(f"advisor/recommendations/{datetime.now(timezone.utc).isoformat()}")


def expand_filter(field: str, values: Iterable[str]) -> str:
    """Build ``(field eq 'a' or field eq 'b')``; "" when there are no values."""
    values = list(values or [])
    if not values:
        return ""
    return "(" + " or ".join(f"{field} eq '{v}'" for v in values) + ")"


def flatten_recommendations(recommends: List[Any]) -> List[dict]:
    result = []
    for v in recommends:
        short_description = getattr(v, "short_description", None)
        result.append({
            "category": enum_value(v.category),
            "description": (short_description.problem if short_description else None) or "",
            "impact": enum_value(v.impact),
            "recommendation_name": v.name,
            "recommendation_type_id": v.recommendation_type_id or "",
            "resource_name": v.impacted_value or "",
            "resource_type": v.impacted_field or "",
            "suppression_names": [str(s) for s in v.suppression_ids or []],
            "updated_time": format_rfc3339(v.last_updated),
        })
    return result


def format_rfc3339(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")
