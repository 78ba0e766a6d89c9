"""Small shared helpers."""

from .json_pretty import (
    debug_pretty_json_from_string,
    debug_pretty_json_from_struct,
    prettify_json_string,
    prettify_json_struct,
)

__all__ = [
    "prettify_json_string",
    "prettify_json_struct",
    "debug_pretty_json_from_string",
    "debug_pretty_json_from_struct",
]
