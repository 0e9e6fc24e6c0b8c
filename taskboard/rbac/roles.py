import re

from taskboard.models.enums import Permission, Role

_WHITESPACE = re.compile(r"\s+")

# who may invite whom; kept consistent by hand (ceo ⊇ manager ⊇ assistant_manager)
INVITE_TABLE: dict[Role, tuple[Role, ...]] = {
    Role.ceo: (Role.manager, Role.assistant_manager, Role.developer, Role.intern),
    Role.manager: (Role.assistant_manager, Role.developer, Role.intern),
    Role.assistant_manager: (Role.developer, Role.intern),
    Role.developer: (),
    Role.intern: (),
}

ROLE_PERMISSIONS: dict[Role, tuple[Permission, ...]] = {
    Role.ceo: (
        Permission.all_departments,
        Permission.can_invite_manager,
        Permission.can_invite_assistant_manager,
        Permission.can_invite_developer,
        Permission.can_invite_intern,
    ),
    Role.manager: (
        Permission.own_department,
        Permission.can_invite_assistant_manager,
        Permission.can_invite_developer,
        Permission.can_invite_intern,
    ),
    Role.assistant_manager: (
        Permission.own_department,
        Permission.can_invite_developer,
        Permission.can_invite_intern,
    ),
    Role.developer: (),
    Role.intern: (),
}

PERFORMANCE_ROLES: frozenset[Role] = frozenset({Role.ceo, Role.manager})
MANAGEMENT_ROLES: frozenset[Role] = frozenset({Role.ceo, Role.manager, Role.assistant_manager})

_DISPLAY_NAMES: dict[Role, str] = {
    Role.ceo: "CEO",
    Role.manager: "Manager",
    Role.assistant_manager: "Assistant Manager",
    Role.developer: "Developer",
    Role.intern: "Intern",
}

def normalize_role(value: str | Role | None) -> str:
    """Lowercase, trim and turn whitespace runs into underscores.

    "Assistant Manager", " assistant  manager" and "assistant_manager" all
    normalize to "assistant_manager". Normalizing twice is a no-op.
    """
    if value is None:
        return ""
    if isinstance(value, Role):
        return value.value
    return _WHITESPACE.sub("_", str(value).strip().lower())

def parse_role(value: str | Role | None) -> Role | None:
    try:
        return Role(normalize_role(value))
    except ValueError:
        return None

def display_role(value: str | Role | None) -> str:
    role = parse_role(value)
    if role is None:
        return "" if value is None else str(value)
    return _DISPLAY_NAMES[role]
