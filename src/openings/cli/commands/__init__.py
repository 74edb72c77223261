"""CLI command implementations for the openings application.

- validate: Validate a scene file
"""

from openings.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
