"""Kubernetes cluster interaction utilities.

This module provides the Cluster class, which selects the kube context and
answers the one question the planner asks the cluster: does a namespace
already exist.
"""

import click
import questionary
from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from rich.markup import escape
from urllib3.exceptions import MaxRetryError

from must_gather_plan import console
from must_gather_plan.exceptions import ClusterConnectionError, ClusterQueryError
from must_gather_plan.styles import POINTER, PROMPT_STYLE, QMARK


class Cluster:
    """Read-only view of a Kubernetes cluster.

    Attributes:
        context: The active Kubernetes context name.

    """

    def __init__(self, *, select_context: bool = False) -> None:
        """Initialize Cluster with context selection.

        Args:
            select_context: If True, prompt user to select a context.
                           If False, use the current context.

        Raises:
            ClusterConnectionError: If the kubeconfig cannot be loaded.

        """
        self.context: str = self._set_context(select_context=select_context)
        try:
            config.load_kube_config(context=self.context)
        except ConfigException as e:
            raise ClusterConnectionError(f"Failed to load context {self.context!r}: {e}") from e

    @staticmethod
    def _set_context(*, select_context: bool) -> str:
        """Set the Kubernetes context to use.

        Args:
            select_context: If True, prompt user to select a context.

        Returns:
            The selected or current context name.

        Raises:
            ClusterConnectionError: If kubeconfig is invalid or missing.
            click.Abort: If user cancels context selection.

        """
        try:
            contexts, current_context = config.list_kube_config_contexts()
        except ConfigException as e:
            raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e
        if select_context:
            context: str | None = questionary.select(
                "Select context to plan the must-gather for",
                choices=[context["name"] for context in contexts],
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).ask()
            if context is None:
                console.warning("Context selection cancelled.")
                raise click.Abort()
        else:
            context = str(current_context["name"])
        console.action(f"Working with {console.highlight(escape(context))} cluster")
        return context

    @staticmethod
    def namespace_exists(name: str) -> bool:
        """Check whether a namespace already exists in the cluster.

        Args:
            name: The namespace name to look for.

        Returns:
            True if a namespace with that name exists.

        Raises:
            ClusterQueryError: If the namespaces cannot be listed.

        """
        try:
            namespaces = client.CoreV1Api().list_namespace().items
        except ApiException as e:
            raise ClusterQueryError(f"failed to list namespaces: {e.status} {e.reason}") from e
        except MaxRetryError as e:
            raise ClusterQueryError(f"failed to list namespaces: {e.reason}") from e

        exists = any(ns.metadata.name == name for ns in namespaces)
        ic(name, exists)

        return exists

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Cluster(context={self.context!r})"
