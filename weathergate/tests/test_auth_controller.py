from __future__ import annotations

from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from weathergate.application.use_cases.users.register_user import RegisterUserUseCase
from weathergate.domain.users.entities import Session, User
from weathergate.domain.users.exceptions import DuplicateUserError
from weathergate.interfaces.http.controllers.auth_controller import AuthController
from weathergate.shared.config import AccessConfig, SecurityConfig
from weathergate.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _controller(**overrides) -> AuthController:
    kwargs = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "access": AccessConfig(),
        "security": SecurityConfig(rate_limit_requests=2),
    }
    kwargs.update(overrides)
    return AuthController(**kwargs)


def test_sign_up_sets_token_cookie_and_redirects_home(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, login: str, password: str) -> tuple[User, Session]:
            register_called["args"] = (login, password)
            return (
                User(username=login, password_hash="hash"),
                Session(token="token123", username=login),
            )

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/sign-up", json={"login": "alice", "password": "pw1"})

        assert response.status_code == 200
        assert response.get_json() == {"type": "redirect", "route": "/"}
        assert register_called["args"] == ("alice", "pw1")
        assert response.headers["Set-Cookie"].startswith("Token=token123")
        assert "HttpOnly" in response.headers["Set-Cookie"]
        assert client.get_cookie("Token").value == "token123"


@pytest.mark.parametrize(
    "body",
    [{"login": "alice"}, {"login": "", "password": "pw1"}, {"login": "  ", "password": "x"}, None],
)
def test_sign_in_invalid_payload_returns_422(flask_app: Flask, body) -> None:
    login = MagicMock()
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/sign-in", json=body)

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["type"] == "error"
    assert payload["code"] == "validation_error"
    assert payload["message"]
    login.execute.assert_not_called()


def test_domain_error_is_rendered_as_error_envelope(flask_app: Flask) -> None:
    register = MagicMock()
    register.execute.side_effect = DuplicateUserError()
    flask_app.register_blueprint(_controller(register_use_case=register).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/sign-up", json={"login": "alice", "password": "pw1"})

    assert response.status_code == 409
    assert response.get_json() == {
        "type": "error",
        "message": "User with this login already exists",
        "code": "user_already_exists",
    }
    assert "Set-Cookie" not in response.headers


def test_sign_in_is_throttled_per_client(flask_app: Flask) -> None:
    login = MagicMock()
    login.execute.return_value = (
        User(username="alice", password_hash="hash"),
        Session(token="tok", username="alice"),
    )
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        codes = [
            client.post("/sign-in", json={"login": "alice", "password": "pw1"}).status_code
            for _ in range(3)
        ]
        limited = client.post("/sign-in", json={"login": "alice", "password": "pw1"})

    assert codes == [200, 200, 429]
    assert limited.get_json()["code"] == "rate_limited"


def test_sign_out_revokes_bearer_token_and_clears_cookie(flask_app: Flask) -> None:
    logout = MagicMock()
    logout.execute.return_value = True
    flask_app.register_blueprint(_controller(logout_use_case=logout).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/sign-out", headers={"Authorization": "Bearer abc"})

    assert response.get_json() == {"type": "redirect", "route": "/login.html"}
    logout.execute.assert_called_once_with("abc")
    assert "Token=;" in response.headers["Set-Cookie"]


def test_unknown_route_uses_error_envelope(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/nope")

    assert response.status_code == 404
    assert response.get_json()["type"] == "error"
