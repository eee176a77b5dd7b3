import io
from functools import wraps
from typing import Any

import pytest
from flask import Blueprint, Flask, jsonify

from fieldguard.api import FlaskAdapter, RouteSpec, Router, current_validation, to_flask_rule
from fieldguard.schema import Field
from fieldguard.settings import Settings
from fieldguard.validation import RequestSchemas


def _echo_validation(**path_kwargs: Any):
    validated = current_validation()
    return jsonify(
        {
            "path_kwargs": path_kwargs,
            "path": validated.outcome.path,
            "query": validated.outcome.query,
            "body": validated.outcome.body,
            "query_string": validated.query_string,
            "raw_body": validated.body.decode("utf-8"),
        }
    )


@pytest.fixture
def app() -> Flask:
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def router(app: Flask) -> Router:
    return Router(FlaskAdapter(app), settings=Settings())


@pytest.mark.unit
def test_to_flask_rule_converts_template_segments() -> None:
    assert to_flask_rule("/widgets/{id}/parts/{part_id}") == "/widgets/<id>/parts/<part_id>"
    assert to_flask_rule("/widgets") == "/widgets"


@pytest.mark.unit
def test_valid_request_reaches_handler_with_normalized_values(app: Flask, router: Router) -> None:
    router.add(
        RouteSpec(
            "/widgets/{id}",
            "POST",
            _echo_validation,
            validate=RequestSchemas(
                path=Field.object({"id": Field.integer().required()}),
                query=Field.object({"verbose": Field.boolean().default(False)}),
                body=Field.object({"name": Field.string().required(), "count": Field.integer().default(1)}),
            ),
        )
    )

    response = app.test_client().post("/widgets/7?extra=x", json={"name": "gear"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["path_kwargs"] == {"id": "7"}
    assert data["path"] == {"id": 7}
    assert data["query"] == {"verbose": False}
    assert data["body"] == {"name": "gear", "count": 1.0}
    assert data["query_string"] == "extra=x&verbose=false"
    assert data["raw_body"] == '{"name":"gear","count":1}'


@pytest.mark.unit
def test_unmodified_request_keeps_raw_encoding(app: Flask, router: Router) -> None:
    router.add(
        RouteSpec(
            "/search",
            "GET",
            _echo_validation,
            validate=RequestSchemas(query=Field.object({"q": Field.string()})),
        )
    )

    response = app.test_client().get("/search?q=hello")

    assert response.status_code == 200
    assert response.get_json()["query_string"] == "q=hello"


@pytest.mark.unit
def test_validation_failure_returns_400_payload(app: Flask, router: Router) -> None:
    router.add(
        RouteSpec(
            "/widgets/{id}",
            "GET",
            _echo_validation,
            validate=RequestSchemas(path=Field.object({"id": Field.integer()})),
        )
    )

    response = app.test_client().get("/widgets/abc")

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["kind"] == "wrong_type"
    assert payload["section"] == "path"
    assert payload["field"] == "id"


@pytest.mark.unit
def test_missing_body_returns_required(app: Flask, router: Router) -> None:
    router.add(
        RouteSpec("/widgets", "POST", _echo_validation, validate=RequestSchemas(body=Field.object({})))
    )

    response = app.test_client().post("/widgets")

    assert response.status_code == 400
    assert response.get_json()["kind"] == "required"
    assert response.get_json()["section"] == "body"


@pytest.mark.unit
def test_invalid_json_body_returns_400(app: Flask, router: Router) -> None:
    router.add(
        RouteSpec("/widgets", "POST", _echo_validation, validate=RequestSchemas(body=Field.object({})))
    )

    response = app.test_client().post("/widgets", data="{broken", content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["message_key"] == "BODY_DECODE_ERROR"


@pytest.mark.unit
@pytest.mark.parametrize("raw", ['{"score": NaN}', '{"score": Infinity}', '{"score": -Infinity}'])
def test_non_finite_json_constants_return_400(app: Flask, router: Router, raw: str) -> None:
    calls: list[object] = []

    def handler():
        calls.append(current_validation())
        return "ok"

    schema = Field.object({"score": Field.number().min(0).max(1)})
    router.add(RouteSpec("/scores", "POST", handler, validate=RequestSchemas(body=schema)))

    response = app.test_client().post("/scores", data=raw, content_type="application/json")

    assert response.status_code == 400
    assert response.get_json()["message_key"] == "BODY_DECODE_ERROR"
    assert calls == []


@pytest.mark.unit
def test_pre_handlers_run_in_declared_order_after_validation(app: Flask, router: Router) -> None:
    calls: list[str] = []

    def tracing(name: str):
        def decorator(view):
            @wraps(view)
            def wrapper(**kwargs: Any):
                calls.append(name)
                return view(**kwargs)

            return wrapper

        return decorator

    def handler():
        calls.append("handler")
        return "done"

    router.add(
        RouteSpec(
            "/ping",
            "GET",
            handler,
            pre_handlers=(tracing("first"), tracing("second")),
            validate=RequestSchemas(query=Field.object({"n": Field.integer().required()})),
        )
    )
    client = app.test_client()

    assert client.get("/ping").status_code == 400
    assert calls == []

    assert client.get("/ping?n=1").status_code == 200
    assert calls == ["first", "second", "handler"]


@pytest.mark.unit
def test_file_body_is_not_json_decoded(app: Flask, router: Router) -> None:
    def upload():
        body = current_validation().outcome.body
        return {"files": sorted(body.keys())}

    router.add(RouteSpec("/upload", "POST", upload, validate=RequestSchemas(body=Field.file())))
    client = app.test_client()

    response = client.post(
        "/upload",
        data={"avatar": (io.BytesIO(b"\x89PNG"), "avatar.png")},
        content_type="multipart/form-data",
    )
    assert response.status_code == 200
    assert response.get_json() == {"files": ["avatar"]}

    assert client.post("/upload").get_json()["kind"] == "required"


@pytest.mark.unit
def test_adapter_works_with_blueprints() -> None:
    app = Flask(__name__)
    blueprint = Blueprint("widgets", __name__, url_prefix="/api")
    router = Router(FlaskAdapter(blueprint), settings=Settings())
    router.add(
        RouteSpec(
            "/widgets",
            "GET",
            _echo_validation,
            validate=RequestSchemas(query=Field.object({"page": Field.integer().default(1)})),
        )
    )
    app.register_blueprint(blueprint)

    response = app.test_client().get("/api/widgets")

    assert response.status_code == 200
    assert response.get_json()["query"] == {"page": 1}


@pytest.mark.unit
def test_current_validation_is_none_outside_installed_routes(app: Flask) -> None:
    with app.test_request_context("/"):
        assert current_validation() is None


@pytest.mark.unit
def test_adapter_registers_logging_extension(app: Flask) -> None:
    FlaskAdapter(app)

    assert "fieldguard.structlog" in app.extensions
