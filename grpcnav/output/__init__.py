"""Output formatting module."""

from .json_formatter import print_json
from .messages import not_found_message
from .console import (
    node_to_dict,
    match_to_dict,
    not_found_to_dict,
    outcome_to_dict,
    candidates_to_dict,
    goto_to_dict,
    print_match,
    print_not_found,
    print_outcome,
    print_candidates,
    print_goto,
)

__all__ = [
    "print_json",
    "not_found_message",
    "node_to_dict",
    "match_to_dict",
    "not_found_to_dict",
    "outcome_to_dict",
    "candidates_to_dict",
    "goto_to_dict",
    "print_match",
    "print_not_found",
    "print_outcome",
    "print_candidates",
    "print_goto",
]
