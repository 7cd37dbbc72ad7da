"""Ensure each JSON schema is exercised by its published example."""

from mcp_unilint.mcp import schema_registry

SCHEMA_EXAMPLE_MAP = {
    "knowledge_base_v0.1": "knowledge_base_example_min",
    "lint_config_v0.1": "lint_config_example_min",
    "lint_source_input_v0.1": "lint_source_input_example_min",
    "lint_files_input_v0.1": "lint_files_input_example_min",
    "lint_source_response_v0.1": "lint_source_response_example_min",
    "lint_files_response_v0.1": "lint_files_response_example_min",
}


def test_all_examples_validate_against_their_schemas() -> None:
    """Every example file should match its declared schema contract."""

    for schema_name, example_name in SCHEMA_EXAMPLE_MAP.items():
        example = schema_registry.get_example(example_name)
        schema_registry.validate(schema_name, example)


def test_every_schema_has_an_example() -> None:
    assert set(SCHEMA_EXAMPLE_MAP) == set(schema_registry.SCHEMA_FILES)
