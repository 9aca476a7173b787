from typing import Any


def _key_part(value: Any) -> str:
    # Render like the web clients do: true/false, 1.0 -> 1
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_room(user_id: Any, mentor_id: Any) -> str:
    """Room key for a (user, mentor) pair.

    Order matters: ``resolve_room("a", "b")`` and ``resolve_room("b", "a")``
    are different rooms. Identifiers are not validated; a missing one renders
    as empty text, booleans as ``true``/``false`` and integral floats without
    the fraction, so keys match those built by JavaScript clients.
    """
    return f"chat_{_key_part(user_id)}_{_key_part(mentor_id)}"
