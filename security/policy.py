"""
security/policy.py
-------------------
Authorization policy for every operation of the client.

Each action maps to the roles allowed to perform it. Some actions may
also not target the acting user. Ownership of rows is enforced by the
repositories, whose statements are scoped to the acting user. The client
calls ``authorize`` before any lookup or service call for the operation.
"""

from enum import Enum
from typing import Optional

from models.user import User, UserRole
from utils.errors import AccessDeniedError
from utils.logger import get_logger

logger = get_logger(__name__)


class Action(str, Enum):
    LIST_USERS = "list_users"
    SET_USER_ROLE = "set_user_role"
    SEND_DIRECT_NOTIFICATION = "send_direct_notification"
    BROADCAST_NOTIFICATION = "broadcast_notification"
    MANAGE_CATALOG = "manage_catalog"
    LIST_ALL_ORDERS = "list_all_orders"
    TAKE_ORDER = "take_order"
    COMPLETE_ORDER = "complete_order"
    MANAGE_OWN_DATA = "manage_own_data"
    PLACE_ORDER = "place_order"
    CANCEL_ORDER = "cancel_order"
    LEAVE_FEEDBACK = "leave_feedback"


_EVERYONE = frozenset(UserRole)

POLICY: dict[Action, frozenset] = {
    Action.LIST_USERS: frozenset({UserRole.MANAGER}),
    Action.SET_USER_ROLE: frozenset({UserRole.MANAGER}),
    Action.SEND_DIRECT_NOTIFICATION: frozenset({UserRole.MANAGER, UserRole.RIDER}),
    Action.BROADCAST_NOTIFICATION: frozenset({UserRole.MANAGER}),
    Action.MANAGE_CATALOG: frozenset({UserRole.MANAGER}),
    Action.LIST_ALL_ORDERS: frozenset({UserRole.MANAGER, UserRole.RIDER}),
    Action.TAKE_ORDER: frozenset({UserRole.RIDER}),
    Action.COMPLETE_ORDER: frozenset({UserRole.RIDER}),
    Action.MANAGE_OWN_DATA: _EVERYONE,
    Action.PLACE_ORDER: _EVERYONE,
    Action.CANCEL_ORDER: _EVERYONE,
    Action.LEAVE_FEEDBACK: _EVERYONE,
}

# The target must be someone other than the actor.
NOT_ON_SELF = frozenset({Action.SET_USER_ROLE})


def check(user: User, action: Action, target: Optional[str] = None) -> Optional[str]:
    """
    Evaluate the policy.

    Args:
        user: The acting user.
        action: What the user is about to do.
        target: Username the action is aimed at, if any.

    Returns:
        None if the action is allowed, otherwise the reason it is denied.
    """
    if user.role not in POLICY[action]:
        return "access denied"
    if action in NOT_ON_SELF and target == user.username:
        return "you cannot do this to yourself"
    return None


def authorize(user: User, action: Action, target: Optional[str] = None) -> None:
    """
    Raise AccessDeniedError unless ``user`` may perform ``action``.
    """
    reason = check(user, action, target=target)
    if reason is not None:
        logger.warning(f"🚫 Denied {action.value} for user \"{user.username}\" ({user.role.value}): {reason}")
        raise AccessDeniedError(reason)
