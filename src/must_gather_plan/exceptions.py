"""Custom exceptions for must-gather-plan.

This module defines the exception hierarchy used throughout the application
to separate user-correctable input errors from cluster and rendering failures.
"""


class MustGatherError(Exception):
    """Base exception for all must-gather-plan errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all planning errors with a single
    except clause if desired.
    """

    pass


class ValidationError(MustGatherError):
    """Raised when a tool parameter cannot be resolved.

    This can occur when:
    - A duration parameter (timeout, since) is not a valid duration
    - A parameter has the wrong type (e.g. images is not a list)
    """

    pass


class UnsupportedParameterError(ValidationError):
    """Raised when a recognised but unsupported parameter is supplied.

    The deprecated image_stream parameter is the only one at the moment.
    """

    pass


class ClusterConnectionError(MustGatherError):
    """Raised when connection to the Kubernetes cluster fails.

    This can occur when:
    - The kubeconfig is invalid or missing
    - The selected context does not exist
    """

    pass


class ClusterQueryError(MustGatherError):
    """Raised when the namespace listing fails.

    This typically means:
    - The cluster is unreachable
    - The user doesn't have permission to list namespaces
    """

    pass


class RenderError(MustGatherError):
    """Raised when a resource descriptor cannot be serialized to YAML."""

    pass
