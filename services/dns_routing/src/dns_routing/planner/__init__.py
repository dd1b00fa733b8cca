"""Reconciliation planner package."""

from .commands import (
    SAVE_CONFIG_CMD,
    create_group_cmd,
    delete_group_cmd,
    delete_route_cmd,
    ensure_save_at_end,
    exclude_domain_cmd,
    include_domain_cmd,
    route_cmd,
)
from .reconciliation import PlanSummary, plan, plan_delete, summarize

__all__ = [
    "SAVE_CONFIG_CMD",
    "create_group_cmd",
    "delete_group_cmd",
    "delete_route_cmd",
    "ensure_save_at_end",
    "exclude_domain_cmd",
    "include_domain_cmd",
    "route_cmd",
    "PlanSummary",
    "plan",
    "plan_delete",
    "summarize",
]
