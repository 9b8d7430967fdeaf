"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "hierarchy-schema.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generation configuration template for hierarchy-schema.
# Replace every <REQUIRED> placeholder before running generate or check.

catalog:
  # Provide either a type catalog path (YAML or JSON) or an inline catalog.
  path: "<REQUIRED>"
  # inline:
  #   types:
  #     - name: Person
  #       members:
  #         - name: Name
  #           type: string

generation:
  # Merge every ancestor into its descendants instead of linking definitions.
  flatten_inheritance_hierarchy: false
  # Only used while flattening: let descendants override inherited members.
  allow_overrides_when_flattening: false
  # Include interface members and members marked abstract.
  generate_abstract_members: true
  # Worker threads used for independent type subtrees.
  max_workers: 1

output:
  # Root types to emit. Remove to emit every type of the catalog.
  # root_types:
  #   - "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generation configuration template with inline guidance."""
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
