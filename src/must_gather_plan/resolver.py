"""Resolution of tool arguments into a PlanConfig.

This module turns the loosely-typed argument mapping received by the tool
into a fully-defaulted, validated PlanConfig. Every recognised parameter,
its expected type and its default is declared here.
"""

import posixpath
import secrets
import shlex
import string
from collections.abc import Mapping
from typing import Any

from icecream import ic

from must_gather_plan.duration import format_seconds, parse_duration
from must_gather_plan.exceptions import UnsupportedParameterError, ValidationError
from must_gather_plan.models import (
    DEFAULT_GATHER_COMMAND,
    DEFAULT_SOURCE_DIR,
    NAMESPACE_PREFIX,
    TIMEOUT_BINARY,
    PlanConfig,
)

NAMESPACE_SUFFIX_LENGTH = 6
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

# Parameter name -> accepted python type(s)
RECOGNIZED_PARAMETERS: dict[str, type | tuple[type, ...]] = {
    "node_name": str,
    "node_selector": str,
    "host_network": bool,
    "gather_command": str,
    "all_component_images": bool,
    "images": (list, tuple),
    "source_dir": str,
    "timeout": str,
    "namespace": str,
    "keep_namespace": bool,
    "since": str,
    "image_stream": str,
}

_TYPE_NAMES = {
    str: "a string",
    bool: "a boolean",
    (list, tuple): "a list of strings",
}


def generate_random_string(length: int) -> str:
    """Generate a random lowercase alphanumeric string.

    Args:
        length: Number of characters to generate.

    Returns:
        A string of exactly ``length`` characters.

    """
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def generate_namespace_name() -> str:
    """Return a fresh temporary namespace name."""
    return f"{NAMESPACE_PREFIX}{generate_random_string(NAMESPACE_SUFFIX_LENGTH)}"


def parse_node_selector(selector: str) -> dict[str, str]:
    """Parse a node selector of the form ``key=value,key2=value2``.

    Keys and values are stripped of surrounding whitespace. Pairs without
    an ``=`` are dropped.

    Args:
        selector: The selector string.

    Returns:
        Mapping of label keys to label values.

    """
    result: dict[str, str] = {}
    for pair in selector.split(","):
        key, sep, value = pair.strip().partition("=")
        if sep:
            result[key.strip()] = value.strip()
    return result


def normalize_path(path: str) -> str:
    """Collapse redundant separators, dot segments and trailing slashes."""
    normalized = posixpath.normpath(path)
    # normpath keeps a leading double slash
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def _get(arguments: Mapping[str, Any], key: str) -> Any:
    """Fetch a recognised argument, checking its type.

    Args:
        arguments: The raw tool arguments.
        key: The parameter name.

    Returns:
        The value, or None if the parameter is absent or null.

    Raises:
        ValidationError: If the value has the wrong type.

    """
    value = arguments.get(key)
    if value is None:
        return None

    expected = RECOGNIZED_PARAMETERS[key]
    if not isinstance(value, expected):
        raise ValidationError(f"{key} must be {_TYPE_NAMES[expected]}, got {type(value).__name__}")
    if expected == (list, tuple) and not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{key} must be {_TYPE_NAMES[expected]}")
    return value


def _validate_duration(name: str, value: str) -> str:
    """Render a validated duration as seconds.

    Raises:
        ValidationError: If the duration cannot be parsed or is negative.

    """
    try:
        duration = parse_duration(value)
    except ValueError as err:
        raise ValidationError(f"{name} duration is not valid: {err}") from err
    if duration.total_seconds() < 0:
        raise ValidationError(f"{name} duration is not valid: {value!r} is negative")
    return format_seconds(duration)


def _split_command(gather_command: str) -> tuple[str, ...]:
    """Split the gather command into container argv.

    Raises:
        ValidationError: If the command has unbalanced quotes or is blank.

    """
    try:
        command = tuple(shlex.split(gather_command))
    except ValueError as err:
        raise ValidationError(f"gather_command is not valid: {err}") from err
    if not command:
        raise ValidationError("gather_command is not valid: it is empty")
    return command


def resolve_parameters(arguments: Mapping[str, Any]) -> PlanConfig:
    """Resolve tool arguments into a PlanConfig.

    Args:
        arguments: Raw tool arguments keyed by parameter name.

    Returns:
        The resolved configuration.

    Raises:
        UnsupportedParameterError: If image_stream is supplied.
        ValidationError: If a parameter has the wrong type, a duration
            is not valid or the gather command cannot be split.

    """
    if _get(arguments, "image_stream"):
        raise UnsupportedParameterError(
            "the image_stream parameter is not supported, please use the images parameter instead"
        )

    unknown = sorted(set(arguments) - set(RECOGNIZED_PARAMETERS))
    if unknown:
        ic(unknown)

    node_selector_arg = _get(arguments, "node_selector")
    node_selector = parse_node_selector(node_selector_arg) if node_selector_arg else {}

    source_dir = normalize_path(_get(arguments, "source_dir") or DEFAULT_SOURCE_DIR)
    namespace = _get(arguments, "namespace") or generate_namespace_name()
    gather_command = _get(arguments, "gather_command") or DEFAULT_GATHER_COMMAND
    images = tuple(_get(arguments, "images") or ())

    timeout = _get(arguments, "timeout")
    if timeout is not None:
        seconds = _validate_duration("timeout", timeout)
        gather_command = f"{TIMEOUT_BINARY} {seconds} {gather_command}"
    command = _split_command(gather_command)

    since = _get(arguments, "since")
    if since is not None:
        _validate_duration("since", since)

    config = PlanConfig(
        namespace=namespace,
        gather_command=gather_command,
        command=command,
        source_dir=source_dir,
        images=images,
        node_name=_get(arguments, "node_name") or None,
        node_selector=node_selector,
        host_network=bool(_get(arguments, "host_network")),
        timeout=timeout,
        since=since,
        keep_namespace=bool(_get(arguments, "keep_namespace")),
        all_component_images=bool(_get(arguments, "all_component_images")),
    )
    ic(config)

    return config
