"""
Enterprise analytics helpers.

Turns an AggregateResult into the statistics payload consumed by the
executive report generator. Nothing here recomputes compliance.
"""

from __future__ import annotations

from ..api.schemas import ReportContext
from ..pipeline.aggregation.service import AggregateFilters, AggregateResult

ALL = "All"

PLATFORM_ROLE = "Platform System Administrator"
PLATFORM_SCOPE = "Multi-Tenant Platform (All Client Enterprises)"
ENTERPRISE_ROLE = "Global HSE Director"
ENTERPRISE_SCOPE = "Enterprise (Single Client)"


def _filter_labels(filters: AggregateFilters | None) -> dict[str, str]:
    filters = filters or AggregateFilters()
    return {
        "site": filters.site_id or ALL,
        "company": filters.organization or ALL,
        "dept": filters.department or ALL,
        "tenant": filters.tenant.name if filters.tenant else ALL,
    }


def build_report_context(
    result: AggregateResult,
    filters: AggregateFilters | None = None,
    platform_admin: bool = False,
    period: str = "Current Quarter",
) -> ReportContext:
    return ReportContext(
        role=PLATFORM_ROLE if platform_admin else ENTERPRISE_ROLE,
        scope=PLATFORM_SCOPE if platform_admin else ENTERPRISE_SCOPE,
        period=period,
        filters=_filter_labels(filters),
        global_score=f"{result.compliance_rate:.1f}%",
        health_band=result.health_band,
        total_workforce=result.total,
        compliant=result.compliant_count,
        non_compliant=result.non_compliant_count,
        inactive=result.inactive_count,
        company_breakdown=[f"{g.name}: {g.rate:.1f}%" for g in result.by_organization],
        site_breakdown=[f"{g.name}: {g.rate:.1f}%" for g in result.by_site],
        risk_departments=[f"{g.name} ({g.rate:.1f}%)" for g in result.risk_departments()],
        training_bottlenecks=[
            f"{m.code} ({m.failure_rate:.1f}% Fail)" for m in result.bottlenecks()
        ],
    )
