"""Tests for resolver.py module."""

import re

import pytest

from must_gather_plan.exceptions import UnsupportedParameterError, ValidationError
from must_gather_plan.models import DEFAULT_GATHER_COMMAND, DEFAULT_SOURCE_DIR
from must_gather_plan.resolver import (
    RECOGNIZED_PARAMETERS,
    generate_random_string,
    normalize_path,
    parse_node_selector,
    resolve_parameters,
)


class TestDefaults:
    """Tests for parameters falling back to defaults."""

    def test_empty_arguments(self):
        """Test every parameter is defaulted when nothing is given."""
        config = resolve_parameters({})

        assert config.source_dir == DEFAULT_SOURCE_DIR
        assert config.images == ()
        assert config.node_name is None
        assert config.node_selector == {}
        assert config.host_network is False
        assert config.keep_namespace is False
        assert config.since is None
        assert config.timeout is None
        assert config.gather_command == DEFAULT_GATHER_COMMAND
        assert config.command == (DEFAULT_GATHER_COMMAND,)

    def test_generated_namespace(self):
        """Test the default namespace carries a six character suffix."""
        config = resolve_parameters({})

        assert re.fullmatch(r"openshift-must-gather-[a-z0-9]{6}", config.namespace)

    def test_unknown_keys_are_ignored(self):
        """Test unrecognised keys do not fail resolution."""
        config = resolve_parameters({"dest_dir": "/tmp/out", "namespace": "ns"})

        assert config.namespace == "ns"

    def test_null_values_are_defaulted(self):
        """Test explicit nulls behave like absent keys."""
        config = resolve_parameters({"source_dir": None, "images": None, "timeout": None})

        assert config.source_dir == DEFAULT_SOURCE_DIR
        assert config.images == ()
        assert config.timeout is None
        assert config.command == (DEFAULT_GATHER_COMMAND,)


class TestNodeSelector:
    """Tests for node selector parsing."""

    def test_whitespace_is_trimmed(self):
        """Test keys and values are trimmed."""
        assert parse_node_selector("a=1, b = 2") == {"a": "1", "b": "2"}

    def test_malformed_pairs_are_dropped(self):
        """Test pairs without '=' are silently dropped."""
        assert parse_node_selector("a=1,broken,,c=3") == {"a": "1", "c": "3"}

    def test_value_may_contain_equals(self):
        """Test only the first '=' separates key from value."""
        assert parse_node_selector("a=b=c") == {"a": "b=c"}

    def test_resolved_selector(self):
        """Test the selector reaches the configuration."""
        config = resolve_parameters({"node_selector": "node-role.kubernetes.io/master="})

        assert config.node_selector == {"node-role.kubernetes.io/master": ""}


class TestSourceDir:
    """Tests for source directory normalization."""

    @pytest.mark.parametrize("value", ["/must-gather/", "/must-gather", "//must-gather//", "/must-gather/./"])
    def test_normalized(self, value):
        """Test trailing slashes and redundant separators collapse."""
        assert resolve_parameters({"source_dir": value}).source_dir == "/must-gather"

    def test_parent_segments(self):
        """Test '..' segments are resolved."""
        assert normalize_path("/data/tmp/../gather") == "/data/gather"


class TestDurations:
    """Tests for timeout and since validation."""

    def test_invalid_timeout(self):
        """Test an invalid timeout is a validation error naming the parameter."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({"timeout": "notaduration"})

        assert "timeout" in str(exc_info.value)

    def test_negative_timeout(self):
        """Test a negative timeout is rejected."""
        with pytest.raises(ValidationError):
            resolve_parameters({"timeout": "-5m"})

    def test_timeout_wraps_command(self):
        """Test the gather command is wrapped with the parsed timeout."""
        config = resolve_parameters({"timeout": "2h10m30s", "gather_command": "/usr/bin/gather_audit_logs"})

        assert config.gather_command == "/usr/bin/timeout 7830s /usr/bin/gather_audit_logs"
        assert config.timeout == "2h10m30s"
        assert config.command == ("/usr/bin/timeout", "7830s", "/usr/bin/gather_audit_logs")

    def test_timeout_too_large(self):
        """Test a timeout beyond the representable range is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({"timeout": "100000000000h"})

        assert "timeout" in str(exc_info.value)

    def test_since_too_large(self):
        """Test a since beyond the representable range is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({"since": "3000000h"})

        assert "since" in str(exc_info.value)

    def test_invalid_since(self):
        """Test an invalid since is a validation error naming the parameter."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({"since": "yesterday"})

        assert "since" in str(exc_info.value)

    def test_since_kept_verbatim(self):
        """Test a valid since is kept as supplied."""
        assert resolve_parameters({"since": "2m5s"}).since == "2m5s"


class TestRejectedParameters:
    """Tests for unsupported and mistyped parameters."""

    def test_image_stream_rejected(self):
        """Test image_stream is rejected with a pointer to images."""
        with pytest.raises(UnsupportedParameterError) as exc_info:
            resolve_parameters({"image_stream": "foo"})

        assert "images" in str(exc_info.value)

    def test_image_stream_rejected_before_other_errors(self):
        """Test image_stream wins over other invalid parameters."""
        with pytest.raises(UnsupportedParameterError):
            resolve_parameters({"image_stream": "foo", "timeout": "bad"})

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("images", "quay.io/example:latest"),
            ("images", ["ok", 3]),
            ("host_network", "yes"),
            ("node_name", 42),
        ],
    )
    def test_wrong_types(self, key, value):
        """Test values of the wrong type are rejected by name."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({key: value})

        assert key in str(exc_info.value)

    def test_all_component_images_recorded(self):
        """Test all_component_images is accepted and recorded."""
        config = resolve_parameters({"all_component_images": True})

        assert config.all_component_images is True
        assert config.images == ()


class TestRandomString:
    """Tests for random suffix generation."""

    def test_length_and_charset(self):
        """Test the generator honours the requested length."""
        for length in (0, 6, 64):
            value = generate_random_string(length)
            assert len(value) == length
            assert re.fullmatch(r"[a-z0-9]*", value)

    def test_recognized_parameters(self):
        """Test the recognised parameter table lists every tool parameter."""
        assert set(RECOGNIZED_PARAMETERS) == {
            "node_name",
            "node_selector",
            "host_network",
            "gather_command",
            "all_component_images",
            "images",
            "source_dir",
            "timeout",
            "namespace",
            "keep_namespace",
            "since",
            "image_stream",
        }


class TestGatherCommand:
    """Tests for gather command splitting."""

    def test_quoted_arguments(self):
        """Test quoted arguments stay together."""
        config = resolve_parameters({"gather_command": '/usr/bin/gather --label "a b"'})

        assert config.command == ("/usr/bin/gather", "--label", "a b")

    def test_unbalanced_quote(self):
        """Test an unbalanced quote is a validation error naming the parameter."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_parameters({"gather_command": '/usr/bin/gather "oops'})

        assert "gather_command is not valid" in str(exc_info.value)

    def test_blank_command(self):
        """Test a whitespace-only command is rejected."""
        with pytest.raises(ValidationError):
            resolve_parameters({"gather_command": "   "})
