"""Must-gather planning pipeline.

This module provides the MustGatherPlanner class which resolves the tool
arguments, builds the resource descriptors, checks the cluster for an
existing namespace and renders the plan.
"""

from collections.abc import Mapping
from typing import Any

from icecream import ic
from rich.markup import escape

from must_gather_plan import console
from must_gather_plan.builder import build_resource_plan
from must_gather_plan.cluster import Cluster
from must_gather_plan.exceptions import ClusterQueryError, ValidationError
from must_gather_plan.models import MUST_GATHER_IMAGE_ANNOTATION, ToolCallResult
from must_gather_plan.renderer import render_plan
from must_gather_plan.resolver import resolve_parameters


class MustGatherPlanner:
    """Produces must-gather plans for a cluster.

    The cluster is only contacted after the arguments resolved successfully,
    so invalid input never requires a working kubeconfig.

    Attributes:
        select_context: Whether to prompt for the kube context when the
            cluster is first needed.

    """

    def __init__(self, cluster: Cluster | None = None, *, select_context: bool = False) -> None:
        """Initialize the planner.

        Args:
            cluster: Cluster to check namespaces against. Created on first
                use when omitted.
            select_context: If True, prompt for the kube context when the
                cluster is created.

        """
        self._cluster = cluster
        self.select_context = select_context

    @property
    def cluster(self) -> Cluster:
        """The cluster namespaces are checked against."""
        if self._cluster is None:
            self._cluster = Cluster(select_context=self.select_context)
        return self._cluster

    def plan(self, arguments: Mapping[str, Any]) -> ToolCallResult:
        """Plan a must-gather collection.

        Args:
            arguments: Raw tool arguments keyed by parameter name.

        Returns:
            The rendered plan, or a result carrying only the error for
            invalid input and namespace listing failures.

        Raises:
            ClusterConnectionError: If the kubeconfig cannot be loaded.
            RenderError: If a descriptor cannot be serialized.

        """
        try:
            config = resolve_parameters(arguments)
        except ValidationError as e:
            ic(e)
            return ToolCallResult.failure(e)

        if config.all_component_images:
            console.warning(
                f"Discovery of images annotated with {MUST_GATHER_IMAGE_ANNOTATION} is not available yet, "
                "only the configured images will be used"
            )

        plan = build_resource_plan(config)

        try:
            with console.spinner(f"Checking for namespace {escape(config.namespace)}..."):
                namespace_exists = self.cluster.namespace_exists(config.namespace)
        except ClusterQueryError as e:
            return ToolCallResult.failure(e)

        if namespace_exists:
            console.info(f"Namespace {console.highlight(escape(config.namespace))} already exists, it will be reused")
            plan = plan.without_namespace()

        return ToolCallResult(
            content=render_plan(plan, keep_namespace=config.keep_namespace, source_dir=config.source_dir)
        )
