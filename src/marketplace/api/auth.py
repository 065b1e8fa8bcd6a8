"""Actor identification.

Authentication happens upstream; the gateway forwards who is calling in
``X-Actor-Id`` and the caller's roles, comma separated, in ``X-Actor-Roles``.
"""

from dataclasses import dataclass

from fastapi import Header

from marketplace.errors import Forbidden, Unauthenticated


@dataclass(frozen=True)
class Actor:
    id: str
    roles: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles

    def require_role(self, role: str) -> None:
        if role not in self.roles:
            raise Forbidden(f"This action requires the {role} role")


def current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_roles: str = Header(default=""),
) -> Actor:
    if not x_actor_id:
        raise Unauthenticated("Unauthorized")
    roles = frozenset(role.strip().lower() for role in x_actor_roles.split(",") if role.strip())
    return Actor(id=x_actor_id, roles=roles)
