"""PlantUML diagram text generated from extracted entities.

All three diagrams are pure functions of :class:`ExtractedEntities`. The
structural decisions (which actor reaches which use case, which interaction
skeleton an action gets) are made here; layout lives in the
``templates/uml/`` Jinja2 templates.
"""

from __future__ import annotations

from prism.analyzer.models import ExtractedEntities, UmlDiagrams

from .naming import to_diagram_id
from .templates import get_renderer

# Objects listed in the use-case note before the remainder is summarised.
NOTE_OBJECT_LIMIT = 5

_USER_FACING_ACTIONS = ("create", "update", "view", "login", "register", "submit", "request")
_SYSTEM_ACTIONS = ("process", "validate", "send", "receive", "generate")


def should_actor_connect_to_action(actor: str, action: str) -> bool:
    """Decide whether *actor* gets an edge to the use case for *action*.

    Admin actors reach everything. User, customer and client actors reach
    user-facing actions only; system and service actors reach system-level
    actions only. Any other actor reaches everything.
    """
    actor_lower = actor.lower()
    action_lower = action.lower()

    if "admin" in actor_lower:
        return True
    if any(word in actor_lower for word in ("user", "customer", "client")):
        return any(word in action_lower for word in _USER_FACING_ACTIONS)
    if any(word in actor_lower for word in ("system", "service")):
        return any(word in action_lower for word in _SYSTEM_ACTIONS)
    return True


def _interaction_kind(action: str) -> str:
    if "login" in action or "authenticate" in action:
        return "login"
    if "create" in action or "add" in action:
        return "create"
    if "update" in action or "edit" in action:
        return "update"
    if "delete" in action or "remove" in action:
        return "delete"
    return "generic"


def generate_use_case(entities: ExtractedEntities) -> str:
    actions = entities.actions
    connections = [
        (to_diagram_id(actor), index)
        for actor in entities.actors
        for index, action in enumerate(actions, start=1)
        if should_actor_connect_to_action(actor, action)
    ]

    # Authentication use cases are included by every create/update/delete one.
    includes: list[tuple[int, int]] = []
    for i, action in enumerate(actions, start=1):
        if "login" not in action and "authenticate" not in action:
            continue
        for j, other in enumerate(actions, start=1):
            if i != j and any(word in other for word in ("create", "update", "delete")):
                includes.append((j, i))

    return get_renderer().render(
        "uml/use_case.puml.j2",
        {
            "actors": entities.actors,
            "actions": actions,
            "objects": entities.objects,
            "connections": connections,
            "includes": includes,
            "note_limit": NOTE_OBJECT_LIMIT,
        },
    )


def generate_sequence(entities: ExtractedEntities) -> str:
    """Sequence diagram for the first actor driving every action in order.

    An error-handling alternative flow is appended when there is more than
    one action.
    """
    primary = entities.actors[0].replace(" ", "_") if entities.actors else None
    steps = [
        {"label": action.replace('"', "'"), "kind": _interaction_kind(action)}
        for action in entities.actions
    ]
    return get_renderer().render(
        "uml/sequence.puml.j2",
        {
            "actors": entities.actors,
            "objects": entities.objects,
            "primary": primary,
            "steps": steps,
        },
    )


def generate_class_diagram(entities: ExtractedEntities) -> str:
    return get_renderer().render(
        "uml/class_diagram.puml.j2",
        {
            "actors": entities.actors,
            "actions": entities.actions,
            "objects": entities.objects,
        },
    )


def generate_uml(entities: ExtractedEntities) -> UmlDiagrams:
    """Build all three diagrams."""
    return UmlDiagrams(
        use_case=generate_use_case(entities),
        sequence=generate_sequence(entities),
        class_diagram=generate_class_diagram(entities),
    )
