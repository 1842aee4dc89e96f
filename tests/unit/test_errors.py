"""Tests for the core error hierarchy."""

from burp_mcp.core.errors import (
    BackendError,
    BurpMcpError,
    ConfigError,
    TransformError,
    UnknownOperationError,
    ValidationError,
)


class TestHierarchy:
    """All errors inherit from BurpMcpError."""

    def test_all_are_burp_mcp_errors(self):
        errors = [
            ValidationError("missing url"),
            UnknownOperationError("nope"),
            BackendError("boom", status_code=500),
            TransformError("bad input"),
            ConfigError("bad config"),
        ]
        for err in errors:
            assert isinstance(err, BurpMcpError)
            assert isinstance(err, Exception)


class TestUnknownOperationError:
    def test_message_names_the_tool(self):
        err = UnknownOperationError("burp_fly")
        assert err.name == "burp_fly"
        assert str(err) == "Unknown tool: burp_fly"


class TestBackendError:
    def test_http_failure_fields(self):
        err = BackendError("Server error", status_code=500, body={"error": "x"})
        assert err.status_code == 500
        assert err.body == {"error": "x"}
        assert err.status_label == "500"
        assert str(err) == "Server error"

    def test_network_failure_has_no_status(self):
        err = BackendError("Connection refused")
        assert err.status_code is None
        assert err.body is None
        assert err.status_label == "Network Error"
