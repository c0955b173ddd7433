"""Rendering of a resource plan as commented, multi-document YAML.

The output is meant to be pasted into a file and applied by an operator,
so it starts with the follow-up commands to run and wraps the manifests
in a fenced ``yaml`` block.
"""

from typing import Any

import yaml
from kubernetes.client import ApiClient

from must_gather_plan.exceptions import RenderError
from must_gather_plan.models import WAIT_CONTAINER_NAME, WAIT_MOUNT_PATH, ResourcePlan

PLAN_FILE_NAME = "must-gather-plan.yaml"
LOCAL_OUTPUT_DIR = "./must-gather-output"

_DOCUMENT_SEPARATOR = "---\n"
_FENCE_OPEN = "```yaml\n"
_FENCE_CLOSE = "```"


def to_yaml(resource: Any) -> str:
    """Serialize a Kubernetes model object to a YAML document.

    Args:
        resource: A kubernetes.client model instance.

    Returns:
        The YAML document with sorted keys.

    Raises:
        RenderError: If the object cannot be serialized.

    """
    kind = getattr(resource, "kind", None) or type(resource).__name__
    try:
        document = ApiClient().sanitize_for_serialization(resource)
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=True)
    except (yaml.YAMLError, TypeError, ValueError) as err:
        raise RenderError(f"failed to marshal {kind} to yaml: {err}") from err


def render_instructions(plan: ResourcePlan, *, keep_namespace: bool, source_dir: str) -> str:
    """Render the comment block explaining how to run the plan.

    Args:
        plan: The resource plan.
        keep_namespace: If True, omit the cleanup commands.
        source_dir: Directory the gather containers write their output to.

    Returns:
        The comment lines, newline terminated.

    """
    namespace = plan.namespace_name
    lines = [
        f"# Save the following content to a file (e.g., {PLAN_FILE_NAME}) "
        f"and apply it with 'kubectl create -f {PLAN_FILE_NAME}'",
        "# Monitor the pod's logs to see when the must-gather process is complete:",
    ]
    lines += [f"# kubectl logs -f -n {namespace} <pod-name> -c {name}" for name in plan.gather_container_names]
    lines += [
        f"# The gather containers write to {source_dir}, "
        f"the {WAIT_CONTAINER_NAME} container exposes the same volume at {WAIT_MOUNT_PATH}",
        "# Once the logs indicate completion, copy the results with:",
        f"# kubectl cp -n {namespace} <pod-name>:{WAIT_MOUNT_PATH} {LOCAL_OUTPUT_DIR} -c {WAIT_CONTAINER_NAME}",
    ]
    if not keep_namespace:
        lines += [
            "# Finally, clean up the resources with:",
            f"# kubectl delete ns {namespace}",
            f"# kubectl delete clusterrolebinding {plan.cluster_role_binding_name}",
        ]
    return "".join(f"{line}\n" for line in lines)


def render_plan(plan: ResourcePlan, *, keep_namespace: bool, source_dir: str) -> str:
    """Render a resource plan as instructions followed by fenced YAML.

    Documents are emitted in the order Namespace (if present), ServiceAccount,
    ClusterRoleBinding, Pod.

    Args:
        plan: The resource plan.
        keep_namespace: If True, omit the cleanup commands.
        source_dir: Directory the gather containers write their output to.

    Returns:
        The rendered plan.

    Raises:
        RenderError: If any descriptor cannot be serialized.

    """
    resources = [plan.namespace, plan.service_account, plan.cluster_role_binding, plan.pod]
    documents = [to_yaml(resource) for resource in resources if resource is not None]

    return "".join(
        [
            render_instructions(plan, keep_namespace=keep_namespace, source_dir=source_dir),
            "\n",
            _FENCE_OPEN,
            *(_DOCUMENT_SEPARATOR + document for document in documents),
            _FENCE_CLOSE,
        ]
    )
