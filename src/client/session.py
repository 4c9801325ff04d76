"""API client session.

The session owns the token. It is sent explicitly on each request instead of
being installed as a default header on a shared HTTP client, and it is cleared
on logout or whenever the API answers 401.
"""

from typing import Any, Optional

import httpx
import structlog

from client.state import Action, ActionType, AuthState, initial_state, reduce

logger = structlog.get_logger()

DEFAULT_TOKEN_HEADER = "x-auth-token"


class ApiSession:
    """A signed-in (or not yet signed-in) conversation with the API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: Optional[str] = None,
        token_header: str = DEFAULT_TOKEN_HEADER,
    ) -> None:
        self._http = http
        self._token_header = token_header
        self.state: AuthState = initial_state(token)
        self.alerts: list[str] = []

    @property
    def token(self) -> Optional[str]:
        return self.state.token

    def dispatch(self, action: Action) -> AuthState:
        self.state = reduce(self.state, action)
        return self.state

    def _headers(self) -> dict[str, str]:
        if not self.state.token:
            return {}
        return {self._token_header: self.state.token}

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request carrying this session's token."""
        headers = {**kwargs.pop("headers", {}), **self._headers()}
        response = await self._http.request(method, url, headers=headers, **kwargs)
        if response.status_code == 401 and self.state.token:
            logger.info("session_token_rejected")
            self.dispatch(Action(ActionType.AUTH_ERROR))
        return response

    async def register(self, name: str, email: str, password: str) -> bool:
        """Register and keep the returned token. On failure, collect alerts."""
        self.alerts.clear()
        response = await self._http.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        if response.status_code == 200:
            self.dispatch(Action(ActionType.REGISTER_SUCCESS, response.json()))
            return True

        self._collect_alerts(response)
        self.dispatch(Action(ActionType.REGISTER_FAIL))
        return False

    async def login(self, email: str, password: str) -> bool:
        """Log in and keep the returned token. On failure, collect alerts."""
        self.alerts.clear()
        response = await self._http.post(
            "/api/auth",
            json={"email": email, "password": password},
        )
        if response.status_code == 200:
            self.dispatch(Action(ActionType.LOGIN_SUCCESS, response.json()))
            return True

        self._collect_alerts(response)
        self.dispatch(Action(ActionType.LOGIN_FAIL))
        return False

    async def load_user(self) -> Optional[dict[str, Any]]:
        """Fetch the current user for the stored token."""
        if not self.state.token:
            self.dispatch(Action(ActionType.AUTH_ERROR))
            return None

        response = await self.request("GET", "/api/auth")
        if response.status_code != 200:
            self.dispatch(Action(ActionType.AUTH_ERROR))
            return None

        user: dict[str, Any] = response.json()
        self.dispatch(Action(ActionType.USER_LOADED, user))
        return user

    def logout(self) -> None:
        self.dispatch(Action(ActionType.LOGOUT))

    def _collect_alerts(self, response: httpx.Response) -> None:
        """Surface each validation message separately, or the single error."""
        try:
            body = response.json()
        except ValueError:
            self.alerts.append(response.text or "Request failed")
            return

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            self.alerts.extend(error["msg"] for error in errors)
        elif isinstance(body, dict) and body.get("msg"):
            self.alerts.append(body["msg"])
