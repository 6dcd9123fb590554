"""Dashboard counters."""
from buddy_core.api.dispatcher import CallContext, Target, registry
from buddy_core.db import schemas
from buddy_core.db.repositories import metrics as metrics_repo


@registry.query("dashboard.getMetrics", output=schemas.DashboardMetrics)
def get_metrics(ctx: CallContext, payload, target: Target):
    return metrics_repo.get_dashboard_metrics(ctx.db)
