"""must-gather-plan: read-only planner for OpenShift must-gather collection.

This package turns a sparse set of parameters into the Kubernetes resources
needed to collect a must-gather bundle and renders them as commented YAML
for an operator to apply. Nothing is ever applied to the cluster.

Example usage:
    from must_gather_plan import MustGatherPlanner

    result = MustGatherPlanner().plan({"images": ["quay.io/example/must-gather:latest"]})
    if not result.is_error:
        print(result.content)
"""

__version__ = "0.1.0"

from must_gather_plan.cli import cli
from must_gather_plan.cluster import Cluster
from must_gather_plan.exceptions import (
    ClusterConnectionError,
    ClusterQueryError,
    MustGatherError,
    RenderError,
    UnsupportedParameterError,
    ValidationError,
)
from must_gather_plan.models import PlanConfig, ResourcePlan, ToolCallResult
from must_gather_plan.planner import MustGatherPlanner

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "Cluster",
    "MustGatherPlanner",
    "PlanConfig",
    "ResourcePlan",
    "ToolCallResult",
    # Exceptions
    "MustGatherError",
    "ValidationError",
    "UnsupportedParameterError",
    "ClusterConnectionError",
    "ClusterQueryError",
    "RenderError",
]
