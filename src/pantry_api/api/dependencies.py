"""Helpers shared by the API routers."""

from uuid import UUID

from fastapi import Request

from pantry_api.containers import AppContainer
from pantry_api.domain.errors import ValidationError

INVALID_PATH_ID_MESSAGE = "The provided ID is not a valid UUID."


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def parse_entity_id(raw: str) -> UUID:
    """Parse an id taken from the URL path."""
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ValidationError([INVALID_PATH_ID_MESSAGE]) from exc


def format_error_messages(messages: list[str]) -> str:
    """Join validation messages into a single human-readable detail."""
    if len(messages) == 1:
        return messages[0]
    if not messages:
        return "The provided configuration was not valid for an unspecified reason."
    lines = ["The provided configuration was not valid:"]
    lines.extend(
        f"  {index}. {message}" for index, message in enumerate(messages, start=1)
    )
    return "\n".join(lines)
