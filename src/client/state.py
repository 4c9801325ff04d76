"""Client-side authentication state.

A pure reducer: given the current ``AuthState`` and an ``Action`` built from
an API response, return the next state. Persisting the token is the
session's job (see ``client.session``), not the reducer's.
"""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Optional


class ActionType(StrEnum):
    REGISTER_SUCCESS = "REGISTER_SUCCESS"
    REGISTER_FAIL = "REGISTER_FAIL"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAIL = "LOGIN_FAIL"
    USER_LOADED = "USER_LOADED"
    AUTH_ERROR = "AUTH_ERROR"
    LOGOUT = "LOGOUT"


@dataclass(frozen=True, slots=True)
class Action:
    type: ActionType
    payload: Any = None


@dataclass(frozen=True, slots=True)
class AuthState:
    """What the UI needs to know about the signed-in user.

    ``is_authenticated`` is None until the first auth response arrives.
    """

    token: Optional[str] = None
    is_authenticated: Optional[bool] = None
    loading: bool = True
    user: Optional[dict[str, Any]] = None


def initial_state(stored_token: Optional[str] = None) -> AuthState:
    """Start from whatever token survived in client storage."""
    return AuthState(token=stored_token)


def reduce(state: AuthState, action: Action) -> AuthState:
    """Derive the next auth state from an action."""
    if action.type in (ActionType.REGISTER_SUCCESS, ActionType.LOGIN_SUCCESS):
        return replace(
            state,
            token=action.payload["token"],
            is_authenticated=True,
            loading=False,
        )
    if action.type == ActionType.USER_LOADED:
        return replace(state, user=action.payload, is_authenticated=True, loading=False)
    if action.type in (
        ActionType.REGISTER_FAIL,
        ActionType.LOGIN_FAIL,
        ActionType.AUTH_ERROR,
        ActionType.LOGOUT,
    ):
        return replace(
            state,
            token=None,
            is_authenticated=False,
            loading=False,
            user=None,
        )
    return state
