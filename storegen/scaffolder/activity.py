"""Activity logging vocabulary shared by the generated modules.

The generated Firestore actions and activity logger agree on the actor
context attached to every logged activity and on the activity type names.
Both are defined here once and rendered into the templates.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

ADMIN_ROLE = "admin"

ACTIVITY_COLLECTION = "recentActivity"

# Descriptor key -> activity type suffix (``PRODUCTS_CREATED`` etc.)
ACTIVITY_EVENTS: dict[str, str] = {
    "add": "CREATED",
    "update": "UPDATED",
    "remove": "DELETED",
    "assignRoles": "ROLES_ASSIGNED",
    "revokeRoles": "ROLES_REVOKED",
}


class ActorContext(BaseModel):
    """Who performed a logged action."""

    model_config = ConfigDict(frozen=True)

    actor_id: str
    actor_email: str
    actor_name: str
    actor_type: str
    is_admin_action: bool = False

    def as_js_fields(self) -> dict[str, Any]:
        """Field names as they appear in the generated JavaScript."""
        return {
            "actorId": self.actor_id,
            "actorEmail": self.actor_email,
            "actorName": self.actor_name,
            "actorType": self.actor_type,
            "isAdminAction": self.is_admin_action,
        }


SYSTEM_ACTOR = ActorContext(
    actor_id="system_generated",
    actor_email="system@yourdomain.com",
    actor_name="System",
    actor_type="System",
    is_admin_action=False,
)


def actor_context(current_user: Optional[dict[str, Any]]) -> ActorContext:
    """Derive the actor context from the store's current user record.

    Mirrors ``_getActorContext`` in the generated logger: no user means the
    synthetic system actor, an ``admin`` role makes the action an admin one.
    """
    if not current_user:
        return SYSTEM_ACTOR
    is_admin = ADMIN_ROLE in (current_user.get("roles") or [])
    return ActorContext(
        actor_id=current_user.get("uid") or SYSTEM_ACTOR.actor_id,
        actor_email=current_user.get("email") or "",
        actor_name=current_user.get("displayName") or current_user.get("email") or "",
        actor_type="Admin" if is_admin else "User",
        is_admin_action=is_admin,
    )


def activity_type(collection_name: str, key: str) -> str:
    """Activity type logged by capability *key* on *collection_name*."""
    return f"{collection_name.upper()}_{ACTIVITY_EVENTS[key]}"
