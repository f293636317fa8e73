from __future__ import annotations

from flask import Flask

from app.errors import NotFoundError, ValidationError, register_error_handlers


def _make_app():
    app = Flask(__name__)
    register_error_handlers(app)

    @app.route("/invalid")
    def invalid():  # pragma: no cover - invoked via test client
        raise ValidationError("Bad date", payload={"field_errors": {"date": "Bad date"}})

    @app.route("/missing")
    def missing():  # pragma: no cover - invoked via test client
        raise NotFoundError("")

    return app


def test_validation_error_includes_field_errors():
    response = _make_app().test_client().get("/invalid")

    assert response.status_code == 422
    assert response.get_json() == {
        "message": "Bad date",
        "field_errors": {"date": ["Bad date"]},
    }


def test_empty_message_falls_back_to_status_default():
    response = _make_app().test_client().get("/missing")

    assert response.status_code == 404
    assert response.get_json() == {"message": "Resource not found."}
