"""Construction of the must-gather resource descriptors.

This module builds the Namespace, ServiceAccount, ClusterRoleBinding and Pod
descriptors for a resolved PlanConfig using the Kubernetes client models.
"""

import copy

from kubernetes import client

from must_gather_plan.models import (
    CLUSTER_ROLE_NAME,
    DEFAULT_MUST_GATHER_IMAGE,
    GATHER_CONTAINER_NAME,
    POD_NAME_PREFIX,
    PRIORITY_CLASS_NAME,
    SERVICE_ACCOUNT_NAME,
    SINCE_ENV_VAR,
    VOLUME_NAME,
    WAIT_CONTAINER_NAME,
    WAIT_IMAGE,
    WAIT_MOUNT_PATH,
    PlanConfig,
    ResourcePlan,
)

_RBAC_API_GROUP = "rbac.authorization.k8s.io"
_PULL_IF_NOT_PRESENT = "IfNotPresent"


def _gather_container_template(config: PlanConfig) -> client.V1Container:
    """Build the container every gather container is cloned from."""
    env = [client.V1EnvVar(name=SINCE_ENV_VAR, value=config.since)] if config.since else None

    return client.V1Container(
        name=GATHER_CONTAINER_NAME,
        image=DEFAULT_MUST_GATHER_IMAGE,
        image_pull_policy=_PULL_IF_NOT_PRESENT,
        command=list(config.command),
        env=env,
        volume_mounts=[client.V1VolumeMount(name=VOLUME_NAME, mount_path=config.source_dir)],
    )


def build_gather_containers(config: PlanConfig) -> list[client.V1Container]:
    """Build one gather container per configured image.

    Container names must be unique within a pod, so every container after
    the first gets an index suffix (``gather``, ``gather-1``, ...).

    Args:
        config: The resolved plan configuration.

    Returns:
        The gather containers, one using the default image if no image
        was configured.

    """
    template = _gather_container_template(config)
    if not config.images:
        return [template]

    containers: list[client.V1Container] = []
    for index, image in enumerate(config.images):
        container = copy.deepcopy(template)
        container.image = image
        if index:
            container.name = f"{GATHER_CONTAINER_NAME}-{index}"
        containers.append(container)
    return containers


def build_wait_container() -> client.V1Container:
    """Build the container keeping the pod alive once gathering is done."""
    return client.V1Container(
        name=WAIT_CONTAINER_NAME,
        image=WAIT_IMAGE,
        image_pull_policy=_PULL_IF_NOT_PRESENT,
        command=["/bin/bash", "-c", "sleep infinity"],
        volume_mounts=[client.V1VolumeMount(name=VOLUME_NAME, mount_path=WAIT_MOUNT_PATH)],
    )


def build_pod(config: PlanConfig) -> client.V1Pod:
    """Build the must-gather pod.

    Args:
        config: The resolved plan configuration.

    Returns:
        A pod with the gather containers followed by the wait container.

    """
    return client.V1Pod(
        api_version="v1",
        kind="Pod",
        metadata=client.V1ObjectMeta(generate_name=POD_NAME_PREFIX, namespace=config.namespace),
        spec=client.V1PodSpec(
            service_account_name=SERVICE_ACCOUNT_NAME,
            node_name=config.node_name,
            node_selector=config.node_selector or None,
            host_network=config.host_network or None,
            priority_class_name=PRIORITY_CLASS_NAME,
            restart_policy="Never",
            volumes=[
                client.V1Volume(name=VOLUME_NAME, empty_dir=client.V1EmptyDirVolumeSource()),
            ],
            containers=[*build_gather_containers(config), build_wait_container()],
            tolerations=[client.V1Toleration(operator="Exists")],
        ),
    )


def build_resource_plan(config: PlanConfig) -> ResourcePlan:
    """Build every resource descriptor of a must-gather plan.

    The namespace descriptor is always included; callers drop it with
    ResourcePlan.without_namespace() when the namespace already exists.

    Args:
        config: The resolved plan configuration.

    Returns:
        The resource plan.

    """
    namespace = client.V1Namespace(
        api_version="v1",
        kind="Namespace",
        metadata=client.V1ObjectMeta(name=config.namespace),
    )

    service_account = client.V1ServiceAccount(
        api_version="v1",
        kind="ServiceAccount",
        metadata=client.V1ObjectMeta(name=SERVICE_ACCOUNT_NAME, namespace=config.namespace),
    )

    cluster_role_binding = client.V1ClusterRoleBinding(
        api_version=f"{_RBAC_API_GROUP}/v1",
        kind="ClusterRoleBinding",
        metadata=client.V1ObjectMeta(name=config.cluster_role_binding_name),
        role_ref=client.V1RoleRef(api_group=_RBAC_API_GROUP, kind="ClusterRole", name=CLUSTER_ROLE_NAME),
        subjects=[
            client.RbacV1Subject(kind="ServiceAccount", name=SERVICE_ACCOUNT_NAME, namespace=config.namespace),
        ],
    )

    return ResourcePlan(
        namespace=namespace,
        service_account=service_account,
        cluster_role_binding=cluster_role_binding,
        pod=build_pod(config),
    )
