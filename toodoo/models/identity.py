"""Stable string identifiers for persisted entities.

The identifier doubles as the alarm-facility key for to-do reminders, so it
must be equal for the same entity and distinct across entities (including
across entity kinds).
"""


def identifier(entity) -> str:
    """Derive `/<Kind>/<id>` for a Category or ToDo (model or database row)."""
    kind = getattr(entity, "ENTITY_KIND", None) or type(entity).__name__
    entity_id = getattr(entity, "id", None)
    if not entity_id:
        raise ValueError(f"{kind} has no identifier yet")
    return f"/{kind}/{entity_id}"
