"""
Tests for operation routing in the MCP tool base class
"""
import asyncio

import pytest

from mcp_tool import MCPToolExecutionError


class TestOperationRouting:
    """Test operation dispatch and operation-specific parameter rules."""

    def test_dispatch(self, counter_tool, make_tool_call):
        """Test a valid operation reaches its handler."""
        result = asyncio.run(counter_tool.execute(make_tool_call("counter", {"operation": "add", "amount": 2})))

        assert result.content == "value=2"
        assert not result.is_error

    def test_missing_operation(self, counter_tool, make_tool_call):
        """Test calls without an operation are rejected."""
        with pytest.raises(MCPToolExecutionError, match="No 'operation' argument provided"):
            asyncio.run(counter_tool.execute(make_tool_call("counter", {})))

    def test_unsupported_operation(self, counter_tool, make_tool_call):
        """Test unknown operations list the available ones."""
        with pytest.raises(MCPToolExecutionError) as exc_info:
            asyncio.run(counter_tool.execute(make_tool_call("counter", {"operation": "reset"})))

        assert str(exc_info.value) == "Unsupported operation: reset. Available operations: add, explode"

    def test_parameter_not_valid_for_operation(self, counter_tool, make_tool_call):
        """Test parameters belonging to other operations are rejected."""
        with pytest.raises(MCPToolExecutionError) as exc_info:
            asyncio.run(counter_tool.execute(make_tool_call("counter", {"operation": "explode", "amount": 1})))

        assert str(exc_info.value) == "Parameter(s) amount not valid for operation 'explode'"

    def test_required_parameter_missing(self, counter_tool, make_tool_call):
        """Test operation-specific required parameters are enforced."""
        with pytest.raises(MCPToolExecutionError) as exc_info:
            asyncio.run(counter_tool.execute(make_tool_call("counter", {"operation": "add"})))

        assert str(exc_info.value) == "Required parameter(s) amount missing for operation 'add'"

    def test_handler_exception_wrapped(self, counter_tool, make_tool_call):
        """Test unexpected handler errors are wrapped with the tool name."""
        with pytest.raises(MCPToolExecutionError) as exc_info:
            asyncio.run(counter_tool.execute(make_tool_call("counter", {"operation": "explode"})))

        assert str(exc_info.value) == "counter operation failed: 'missing'"

    def test_tool_name(self, counter_tool):
        """Test the tool name is derived from the class name."""
        assert counter_tool.get_tool_name() == "counter"
