"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, field_validator

from api.exception_handlers import setup_exception_handlers
from api.schemas.common import require_text
from core.exceptions import PostNotFoundError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_code_and_msg(self) -> None:
        app = _create_test_app()

        @app.get("/raise-app")
        async def _() -> None:
            raise PostNotFoundError("some-id")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-app")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "POST_NOT_FOUND"
        assert body["msg"] == "Post not found"
        assert body["details"]["post_id"] == "some-id"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/raise-http")
        async def _() -> None:
            raise HTTPException(status_code=403, detail="Forbidden")

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/raise-http")

        assert response.status_code == 403
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["msg"] == "Forbidden"

    @pytest.mark.asyncio
    async def test_validation_error_returns_400_with_field_messages(self) -> None:
        app = _create_test_app()

        class Body(BaseModel):
            status: str
            skills: str

            @field_validator("status")
            @classmethod
            def validate_status(cls, v: str) -> str:
                return require_text(v, "Status")

            @field_validator("skills")
            @classmethod
            def validate_skills(cls, v: str) -> str:
                return require_text(v, "Skills")

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={"status": " ", "skills": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert [e["msg"] for e in body["errors"]] == [
            "Status is required",
            "Skills is required",
        ]
        assert [e["field"] for e in body["errors"]] == ["status", "skills"]

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "test-req-id"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("boom"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["msg"] == "Server Error"
        assert body["details"]["request_id"] == "test-req-id"

    @pytest.mark.asyncio
    async def test_missing_field_uses_required_message(self) -> None:
        from datetime import date

        app = _create_test_app()

        class Body(BaseModel):
            text: str
            field_of_study: str
            from_date: date

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={})

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert [e["msg"] for e in errors] == [
            "Text is required",
            "Field of study is required",
            "From date is required",
        ]
        assert {e["type"] for e in errors} == {"missing"}
