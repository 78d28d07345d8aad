"""User-facing messages for failed resolutions."""

from ..models import NotFound, METHOD_ABSENT


def not_found_message(outcome: NotFound) -> str:
    """Render the hint shown when no implementation method is found."""
    if outcome.reason == METHOD_ABSENT and outcome.class_name:
        return f"Method {outcome.method_name} not found in implementation {outcome.class_name}"
    # Receiver as the user wrote it, not the stripped lowercase base name
    return f"No implementation found for {outcome.receiver_name}.{outcome.method_name}"
