"""
Tests for schema generation and argument validation
"""
import pytest

from mcp_tool import MCPToolDefinition, MCPToolParameter, MCPToolValidationError
from mcp_tool.mcp_tool_schema import build_arguments_model, build_input_schema, validate_arguments


@pytest.fixture
def definition():
    """Fixture providing a definition with nested parameters."""
    return MCPToolDefinition(
        name="sample",
        description="Sample tool",
        parameters=[
            MCPToolParameter(name="message", type="string", description="Message"),
            MCPToolParameter(name="count", type="integer", description="Count", required=False, minimum=0),
            MCPToolParameter(name="ratio", type="number", description="Ratio", required=False),
            MCPToolParameter(name="flag", type="boolean", description="Flag", required=False),
            MCPToolParameter(
                name="channels",
                type="array",
                description="Channels",
                required=False,
                items=MCPToolParameter(
                    name="channel", type="string", description="Channel", enum=["waybar", "popup"]
                )
            ),
            MCPToolParameter(
                name="options",
                type="object",
                description="Options",
                required=False,
                properties={
                    "severity": MCPToolParameter(
                        name="severity", type="string", description="Severity", required=False,
                        enum=["info", "crit"]
                    ),
                    "durationSeconds": MCPToolParameter(
                        name="durationSeconds", type="integer", description="Duration", required=False,
                        minimum=0
                    )
                }
            )
        ]
    )


@pytest.fixture
def model(definition):
    """Fixture providing the arguments model for the sample definition."""
    return build_arguments_model(definition)


class TestBuildInputSchema:
    """Test JSON schema generation."""

    def test_nested_schema(self, definition):
        """Test arrays and objects are described recursively."""
        schema = build_input_schema(definition)

        assert schema["type"] == "object"
        assert schema["required"] == ["message"]
        assert schema["additionalProperties"] is False
        assert schema["properties"]["count"] == {"type": "integer", "description": "Count", "minimum": 0}
        assert schema["properties"]["channels"]["items"] == {
            "type": "string",
            "description": "Channel",
            "enum": ["waybar", "popup"]
        }

        options = schema["properties"]["options"]
        assert options["type"] == "object"
        assert options["required"] == []
        assert options["additionalProperties"] is False
        assert set(options["properties"].keys()) == {"severity", "durationSeconds"}

    def test_unsupported_type(self):
        """Test a parameter with an unknown type cannot be turned into a model."""
        definition = MCPToolDefinition(
            name="bad",
            description="Bad tool",
            parameters=[MCPToolParameter(name="when", type="date", description="When")]
        )

        with pytest.raises(ValueError, match="Unsupported parameter type 'date'"):
            build_arguments_model(definition)


class TestValidateArguments:
    """Test argument validation."""

    def test_valid_arguments(self, model):
        """Test valid arguments are returned unchanged."""
        arguments = {
            "message": "hi",
            "count": 2,
            "ratio": 0.5,
            "flag": True,
            "channels": ["popup"],
            "options": {"severity": "crit", "durationSeconds": 3}
        }

        assert validate_arguments(model, arguments) == arguments

    def test_unset_fields_omitted(self, model):
        """Test optional fields the client left out are not filled in."""
        assert validate_arguments(model, {"message": "hi", "options": {"durationSeconds": 1}}) == {
            "message": "hi",
            "options": {"durationSeconds": 1}
        }

    def test_none_arguments_treated_as_empty(self, model):
        """Test a missing arguments object is checked as an empty one."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, None)

        assert str(exc_info.value) == "message: Field required"

    def test_null_optional_values_removed(self, model):
        """Test explicit nulls are treated as absent at every level."""
        arguments = {"message": "hi", "count": None, "options": {"severity": None, "durationSeconds": 2}}

        assert validate_arguments(model, arguments) == {"message": "hi", "options": {"durationSeconds": 2}}

    def test_null_required_value_rejected(self, model):
        """Test a required value cannot be null."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": None})

        assert str(exc_info.value) == "message: Field required"

    def test_unknown_parameter(self, model):
        """Test unknown top level parameters are rejected."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": "hi", "zeta": 1})

        assert str(exc_info.value) == "zeta: Extra inputs are not permitted"

    def test_unknown_nested_parameter(self, model):
        """Test unknown nested parameters are reported with their path."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": "hi", "options": {"colour": "red"}})

        assert str(exc_info.value) == "options.colour: Extra inputs are not permitted"

    @pytest.mark.parametrize("name,value", [
        ("message", 42),
        ("count", "3"),
        ("count", True),
        ("count", 1.5),
        ("ratio", "0.5"),
        ("flag", "yes"),
        ("channels", "popup"),
        ("options", []),
    ])
    def test_type_mismatch(self, model, name, value):
        """Test values of the wrong JSON type are rejected rather than coerced."""
        arguments = {"message": "hi"}
        arguments[name] = value

        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, arguments)

        assert exc_info.value.path == name

    def test_minimum(self, model):
        """Test numeric lower bounds are enforced."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": "hi", "count": -1})

        assert str(exc_info.value) == "count: Input should be greater than or equal to 0"

    def test_nested_minimum(self, model):
        """Test nested numeric lower bounds are enforced."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": "hi", "options": {"durationSeconds": -5}})

        assert exc_info.value.path == "options.durationSeconds"

    def test_enum_in_array(self, model):
        """Test array items are checked with their index in the path."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, {"message": "hi", "channels": ["popup", "email"]})

        assert exc_info.value.path == "channels[1]"
        assert "'waybar'" in str(exc_info.value)

    def test_non_object_arguments(self, model):
        """Test the arguments value must be an object."""
        with pytest.raises(MCPToolValidationError) as exc_info:
            validate_arguments(model, "hi")

        assert str(exc_info.value) == "arguments must be an object, got str"
