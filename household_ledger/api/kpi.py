"""
Metric endpoints.

Stateless: the dashboard posts period totals it already has
and gets the derived figures back. Nothing is read from
storage here.
"""

from fastapi import APIRouter

from household_ledger.schemas.kpi import MetricsRequest, MetricsResponse
from household_ledger.services import kpi

router = APIRouter(prefix="/kpi", tags=["KPI"])


@router.post("/metrics", response_model=MetricsResponse)
def compute_metrics(request: MetricsRequest):
    flow = kpi.cash_flow(request.income, request.expenses)
    return MetricsResponse(
        cash_flow=flow,
        savings_rate=float(kpi.savings_rate(request.income, request.expenses)),
        cash_flow_change_percent=float(
            kpi.cash_flow_change_percent(flow, request.expenses)
        ),
        transfer_outflows=kpi.transfer_outflows(request.transfers),
    )
