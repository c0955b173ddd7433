"""Data models for must-gather-plan.

This module provides the process-wide defaults and the type-safe data
structures passed between the resolver, the builder and the renderer.
"""

from dataclasses import dataclass, field, replace
from typing import NamedTuple

from kubernetes.client import V1ClusterRoleBinding, V1Namespace, V1Pod, V1ServiceAccount

DEFAULT_MUST_GATHER_IMAGE = "registry.redhat.io/openshift4/ose-must-gather:latest"
DEFAULT_GATHER_COMMAND = "/usr/bin/gather"
DEFAULT_SOURCE_DIR = "/must-gather"
DEFAULT_TIMEOUT = "10m"
TIMEOUT_BINARY = "/usr/bin/timeout"

WAIT_CONTAINER_NAME = "wait"
WAIT_IMAGE = "registry.redhat.io/ubi9/ubi-minimal"
WAIT_MOUNT_PATH = "/must-gather"

GATHER_CONTAINER_NAME = "gather"
NAMESPACE_PREFIX = "openshift-must-gather-"
POD_NAME_PREFIX = "must-gather-"
SERVICE_ACCOUNT_NAME = "must-gather-collector"
CLUSTER_ROLE_BINDING_PREFIX = "must-gather-collector-"
CLUSTER_ROLE_NAME = "cluster-admin"
PRIORITY_CLASS_NAME = "system-cluster-critical"
VOLUME_NAME = "must-gather-collection"
SINCE_ENV_VAR = "MUST_GATHER_SINCE"

# Annotation carrying an operator's must-gather image on ClusterOperators and
# ClusterServiceVersions; read by all_component_images once discovery exists.
MUST_GATHER_IMAGE_ANNOTATION = "operators.openshift.io/must-gather-image"


def cluster_role_binding_name(namespace: str) -> str:
    """Return the cluster-role-binding name used for a namespace."""
    return f"{CLUSTER_ROLE_BINDING_PREFIX}{namespace}"


@dataclass(frozen=True, slots=True)
class PlanConfig:
    """Resolved parameters for a must-gather plan.

    Attributes:
        namespace: Namespace every resource is created in.
        gather_command: Command run by each gather container, timeout-wrapped
            when a timeout was supplied.
        command: The gather command split into container argv.
        source_dir: Normalized directory the gather containers write to.
        images: Gather images in order; empty means the default image.
        node_name: Node to pin the pod to.
        node_selector: Label selector the pod is scheduled with.
        host_network: Whether the pod runs in the host network.
        timeout: Validated timeout duration, None when not supplied.
        since: Validated log age duration as supplied.
        keep_namespace: Whether cleanup instructions are omitted.
        all_component_images: Recorded only; image discovery is not available.

    """

    namespace: str
    gather_command: str = DEFAULT_GATHER_COMMAND
    command: tuple[str, ...] = (DEFAULT_GATHER_COMMAND,)
    source_dir: str = DEFAULT_SOURCE_DIR
    images: tuple[str, ...] = ()
    node_name: str | None = None
    node_selector: dict[str, str] = field(default_factory=dict)
    host_network: bool = False
    timeout: str | None = None
    since: str | None = None
    keep_namespace: bool = False
    all_component_images: bool = False

    @property
    def cluster_role_binding_name(self) -> str:
        """The cluster-role-binding name derived from the namespace."""
        return cluster_role_binding_name(self.namespace)


@dataclass(frozen=True)
class ResourcePlan:
    """Resource descriptors making up a must-gather plan.

    Attributes:
        namespace: Namespace descriptor, None when the namespace already exists.
        service_account: Service account the pod runs as.
        cluster_role_binding: Binding granting cluster-admin to the service account.
        pod: Pod running the gather containers and the wait container.

    """

    namespace: V1Namespace | None
    service_account: V1ServiceAccount
    cluster_role_binding: V1ClusterRoleBinding
    pod: V1Pod

    @property
    def namespace_name(self) -> str:
        """The namespace every descriptor is placed in."""
        return self.pod.metadata.namespace

    @property
    def cluster_role_binding_name(self) -> str:
        """The name of the cluster-role-binding descriptor."""
        return self.cluster_role_binding.metadata.name

    @property
    def gather_container_names(self) -> list[str]:
        """Names of the gather containers, in pod order."""
        return [c.name for c in self.pod.spec.containers if c.name != WAIT_CONTAINER_NAME]

    def without_namespace(self) -> "ResourcePlan":
        """Return a copy of the plan without the Namespace descriptor."""
        return replace(self, namespace=None)


class ToolCallResult(NamedTuple):
    """Outcome of a tool invocation.

    Attributes:
        content: Text returned to the caller, empty on failure.
        error: User-facing error, None on success.

    """

    content: str
    error: Exception | None = None

    @classmethod
    def failure(cls, error: Exception) -> "ToolCallResult":
        """Build a result carrying only an error."""
        return cls(content="", error=error)

    @property
    def is_error(self) -> bool:
        """Whether the invocation failed."""
        return self.error is not None
