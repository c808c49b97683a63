"""scriptflow CLI commands."""

from .markup import format_command, validate_command
from .paginate import paginate_command
from .parse import parse_command

__all__ = [
    "format_command",
    "paginate_command",
    "parse_command",
    "validate_command",
]
