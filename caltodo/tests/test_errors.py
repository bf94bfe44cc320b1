import pytest
from werkzeug.exceptions import Forbidden

from caltodo.app.errors import (
    AppError,
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    get_error_message,
    get_error_status,
    register_error_handlers,
)


@pytest.mark.parametrize(
    "error,status",
    [
        (ValidationError("bad title"), 400),
        (UnauthorizedError(), 403),
        (NotFoundError("Task not found"), 404),
        (ConflictError("already completed"), 409),
        (Forbidden(), 403),
        (ValueError("boom"), 500),
    ],
)
def test_get_error_status(error, status):
    assert get_error_status(error) == status


def test_get_error_status_reads_status_code_attribute():
    class UpstreamError(Exception):
        status_code = 502

    assert get_error_status(UpstreamError()) == 502


def test_get_error_message():
    assert get_error_message(NotFoundError("Task not found")) == "Task not found"
    assert get_error_message(UnauthorizedError()) == "Unauthorized."
    assert get_error_message(AppError("secret detail", 500, expose=False)) == "Internal Server Error"
    assert get_error_message(AppError("   ", 400)) == "Internal Server Error"
    assert get_error_message(ValueError("database password in here")) == "Internal Server Error"


def test_error_handlers_render_json(app, client):
    @app.route("/api/conflict")
    def conflict():
        raise ConflictError("Task already completed")

    @app.route("/api/crash")
    def crash():
        raise RuntimeError("unexpected")

    @app.route("/page")
    def page():
        raise Forbidden()

    register_error_handlers(app)

    resp = client.get("/api/conflict")
    assert resp.status_code == 409
    assert resp.get_json() == {"message": "Task already completed"}

    resp = client.get("/api/crash")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal Server Error"}

    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "message" in resp.get_json()

    resp = client.get("/page")
    assert resp.status_code == 403
    assert resp.get_json(silent=True) is None
