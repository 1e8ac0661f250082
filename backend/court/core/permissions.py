"""Role Permissions — single role-to-action table consumed by lifecycle and voting engine.

Invariants:
    - allows() is PURE: same (role, action) always yields the same answer
    - Every Action appears in _PERMISSIONS; an unknown action is never allowed
    - authorize() distinguishes missing principal (401) from wrong role (403)

Design Decisions:
    - One frozenset table over per-operation inline checks: the whole policy
      is readable in one place and testable without services
"""

from court.core.domain_types import Action, Principal, Role
from court.core.errors import AuthenticationError, AuthorizationError, ErrorContext

_ALL_ROLES = frozenset(Role)
_PARTIES = frozenset({Role.DEFENDANT, Role.PLAINTIFF})
_JUDGE = frozenset({Role.JUDGE})
_JUROR = frozenset({Role.JUROR})

_PERMISSIONS: dict[Action, frozenset[Role]] = {
    Action.SUBMIT_CASE: _PARTIES,
    Action.LIST_CASES: _ALL_ROLES,
    Action.VIEW_CASE: _ALL_ROLES,
    Action.SEARCH_BY_SUBMITTER: _JUROR,
    Action.EDIT_CASE: _JUDGE,
    Action.APPROVE_CASE: _JUDGE,
    Action.REJECT_CASE: _JUDGE,
    Action.DELETE_CASE: _JUDGE,
    Action.CAST_VOTE: _JUROR,
    Action.VIEW_RESULTS: frozenset({Role.JUDGE, Role.JUROR}),
    Action.LIST_OWN_VOTES: _JUROR,
}


def allows(role: Role, action: Action) -> bool:
    """True when `role` may perform `action`."""
    return role in _PERMISSIONS.get(action, frozenset())


def authorize(principal: Principal | None, action: Action) -> Principal:
    """Return the principal if it may perform `action`, else raise.

    Raises AuthenticationError when no principal was resolved and
    AuthorizationError when the principal's role lacks the permission.
    """
    if principal is None:
        raise AuthenticationError(context=ErrorContext(action=action.value))
    if not allows(principal.role, action):
        raise AuthorizationError(
            f"Role {principal.role.value} may not {action.value.replace('_', ' ')}",
            context=ErrorContext(principal_id=principal.id, action=action.value),
        )
    return principal
