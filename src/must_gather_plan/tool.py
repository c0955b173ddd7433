"""Tool description of the must-gather planner.

The name, description, JSON schema and annotations below are what a tool
registry needs to expose the planner; handle_tool_call is the handler it
dispatches to.
"""

from collections.abc import Mapping
from typing import Any

from must_gather_plan.cluster import Cluster
from must_gather_plan.models import DEFAULT_GATHER_COMMAND, DEFAULT_SOURCE_DIR, DEFAULT_TIMEOUT, ToolCallResult
from must_gather_plan.planner import MustGatherPlanner

TOOL_NAME = "plan_mustgather"
TOOL_TITLE = "MustGather: Plan"
TOOL_DESCRIPTION = (
    "Plan for collecting a must-gather archive from an OpenShift cluster, must-gather is a tool for "
    "collecting cluster data related to debugging and troubleshooting like logs, kubernetes resources, etc."
)

INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "node_name": {
            "type": "string",
            "description": "Optional node to run the mustgather pod. "
            "If not provided, a random control-plane node will be selected automatically",
        },
        "node_selector": {
            "type": "string",
            "description": "Optional node label selector to use, only relevant when specifying a command and "
            "image which needs to capture data on a set of cluster nodes simultaneously",
        },
        "host_network": {
            "type": "boolean",
            "description": "Optionally run the must-gather pods in the host network of the node. "
            "This is only relevant if a specific gather image needs to capture host-level data",
        },
        "gather_command": {
            "type": "string",
            "description": "Optionally specify a custom gather command to run a specialized script, "
            "eg. /usr/bin/gather_audit_logs",
            "default": DEFAULT_GATHER_COMMAND,
        },
        "all_component_images": {
            "type": "boolean",
            "description": "Optional when enabled, collects and runs multiple must gathers for all operators and "
            "components on the cluster that have an annotated must-gather image available",
        },
        "images": {
            "type": "array",
            "description": "Optional list of images to use for gathering custom information about specific "
            "operators or cluster components. If not specified, OpenShift's default must-gather image "
            "will be used by default",
            "items": {"type": "string"},
        },
        "source_dir": {
            "type": "string",
            "description": "Optional to set a specific directory where the pod will copy gathered data from",
            "default": DEFAULT_SOURCE_DIR,
        },
        "timeout": {
            "type": "string",
            "description": "Timeout of the gather process eg. 30s, 6m20s, or 2h10m30s",
            "default": DEFAULT_TIMEOUT,
        },
        "namespace": {
            "type": "string",
            "description": "Optional to specify an existing privileged namespace where must-gather pods should "
            "run. If not provided, a temporary namespace will be created",
        },
        "keep_namespace": {
            "type": "boolean",
            "description": "Optional to retain all temporary resources when the mustgather completes, "
            "otherwise temporary resources created will be cleaned up",
        },
        "since": {
            "type": "string",
            "description": "Optional to collect logs newer than a relative duration like 5s, 2m5s, or 3h6m10s. "
            "If unspecified, all available logs will be collected",
        },
    },
}

TOOL_ANNOTATIONS: dict[str, Any] = {
    "title": TOOL_TITLE,
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": False,
    "openWorldHint": True,
}


def tool_definition() -> dict[str, Any]:
    """Return the full tool definition as a registry would publish it."""
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "inputSchema": INPUT_SCHEMA,
        "annotations": TOOL_ANNOTATIONS,
    }


def handle_tool_call(arguments: Mapping[str, Any], cluster: Cluster | None = None) -> ToolCallResult:
    """Handle a plan_mustgather invocation.

    Args:
        arguments: The invocation arguments.
        cluster: Cluster to check namespaces against, the current kube
            context when omitted.

    Returns:
        The tool call result.

    """
    return MustGatherPlanner(cluster).plan(arguments)
