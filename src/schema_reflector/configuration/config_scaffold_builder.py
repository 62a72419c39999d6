"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-reflector.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Reflector configuration template for schema-reflector.
# Every section is optional; remove the entries you do not need.
# Import paths look like "package.module:Attribute".

reflector:
  # Base URL of generated $id values, e.g. "https://example.com/schemas".
  base_schema_id: ""
  anonymous: false
  assign_anchor: false
  allow_additional_properties: false
  # Only the "required" jsonschema tag marks a property as required.
  required_from_jsonschema_tags: false
  # Expand every type in place instead of emitting $defs and $ref.
  do_not_reference: false
  # Put the root type's own definition at the top of the document.
  expanded_struct: false
  field_name_tag: "json"
  ignored_types: []
  # Modules whose class and attribute docstrings become descriptions.
  comment_modules: []
  comment_map: {}

hooks:
  # lookup: "<OPTIONAL>"
  # mapper: "<OPTIONAL>"
  # namer: "<OPTIONAL>"
  # key_namer: "<OPTIONAL>"
  # additional_fields: "<OPTIONAL>"
  # lookup_comment: "<OPTIONAL>"

cache:
  enabled: false
  # Zero keeps every entry.
  max_entries: 0
"""


def build_placeholder_configuration() -> str:
    """Build a YAML reflector configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
