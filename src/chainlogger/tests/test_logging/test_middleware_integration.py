# src/chainlogger/tests/test_logging/test_middleware_integration.py
import json

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.testclient import TestClient

import chainlogger
from chainlogger.core.logging.middleware import AccessLogMiddleware, CorrelationIdMiddleware
from chainlogger.core.logging.transformers import json_transformer, text_transformer

def make_app(**access_log_options) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AccessLogMiddleware, **access_log_options)

    @app.get("/another")
    async def another():
        return Response(status_code=200)

    @app.get("/")
    async def forbidden():
        return Response(status_code=403)

    return app

def test_sets_dash_as_default_username(sink):
    client = TestClient(make_app())
    assert client.get("/another").status_code == 200

    [text] = sink.texts("info")
    assert " - 200 GET /another" in text

def test_logs_basic_auth_username_status_and_duration(sink):
    client = TestClient(make_app())
    client.get("/", auth=("foo", "bar"))

    [text] = sink.texts("info")
    assert "foo 403 GET /" in text
    assert "ms)" in text

def test_unparsable_basic_auth_falls_back_to_dash(sink):
    client = TestClient(make_app())
    # base64 of "nocolon": no user/password separator
    client.get("/another", headers={"Authorization": "Basic bm9jb2xvbg=="})
    assert " - 200 GET /another" in sink.texts("info")[0]

def test_json_access_log_fields(chain_logger, sink):
    client = TestClient(make_app(use_json_transformer=True))
    client.get("/", auth=("foo", "bar"))

    assert chain_logger.transformer is json_transformer
    data = json.loads(sink.texts("info")[0])
    assert data["processTime"]
    assert data["message"] == "foo 403 GET /"
    assert isinstance(data["duration"], int)
    assert "isAccessLog" not in data

def test_text_transformer_false_means_json(chain_logger):
    client = TestClient(make_app(use_text_transformer=False))
    client.get("/another")
    assert chain_logger.transformer is json_transformer

def test_text_transformer_true_keeps_text(chain_logger):
    client = TestClient(make_app(use_text_transformer=True))
    client.get("/another")
    assert chain_logger.transformer is text_transformer

def test_explicit_chain_logger_is_used():
    recorded = []
    own = chainlogger.ChainLogger(chainlogger.LogSink(info=recorded.append, warn=recorded.append, error=recorded.append))
    client = TestClient(make_app(chain_logger=own))
    client.get("/another")
    assert len(recorded) == 1

def test_decoded_path_is_logged(sink):
    app = make_app()

    @app.get("/files/{name}")
    async def file(name: str):
        return Response(status_code=204)

    TestClient(app).get("/files/a%20b")
    assert "204 GET /files/a b" in sink.texts("info")[0]

def test_error_handler_logging_with_text_transformer(sink):
    app = make_app(use_text_transformer=True)

    @app.get("/broken")
    async def broken():
        raise RuntimeError("something happened")

    @app.exception_handler(RuntimeError)
    async def on_runtime_error(request: Request, exc: RuntimeError):
        chainlogger.error(exc, req=request)
        return PlainTextResponse("oops", status_code=500)

    response = TestClient(app).get("/broken")
    assert response.status_code == 500

    [error_text] = sink.texts("error")
    assert "ERR: something happened" in error_text
    assert "500 GET /broken" in sink.texts("info")[0]

def test_unhandled_error_still_logs_access_entry(sink):
    app = make_app()

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unhandled")

    response = TestClient(app, raise_server_exceptions=False).get("/crash")
    assert response.status_code == 500
    assert len(sink.texts("info")) == 1
    assert "- 500 GET /crash" in sink.texts("info")[0]

def make_correlated_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(AccessLogMiddleware)

    @app.get("/hello")
    async def hello(request: Request):
        chainlogger.info("handling hello")
        return {"seen": request.headers.get("x-correlation-id")}

    return app

def test_correlation_id_in_response_handler_and_logs(sink):
    client = TestClient(make_correlated_app())
    resp = client.get("/hello")
    assert resp.status_code == 200

    correlation_id = resp.headers.get("X-Correlation-ID")
    assert correlation_id is not None
    assert len(correlation_id) == 36
    assert resp.json() == {"seen": correlation_id}

    handler_text, access_text = sink.texts("info")
    assert f"handling hello (c:{correlation_id})" in handler_text
    assert f"200 GET /hello (c:{correlation_id})" in access_text

def test_incoming_correlation_id_is_kept(sink):
    client = TestClient(make_correlated_app())
    resp = client.get("/hello", headers={"X-Correlation-ID": "upstream-id"})

    assert resp.headers["X-Correlation-ID"] == "upstream-id"
    assert resp.json() == {"seen": "upstream-id"}
    assert all("(c:upstream-id)" in text for text in sink.texts("info"))

def test_correlation_context_is_reset_after_request(sink):
    client = TestClient(make_correlated_app())
    client.get("/hello")
    assert chainlogger.current_correlation_id() is None

def test_access_log_printed_by_default_logger_without_setup_logging(capsys, unconfigured_sink_logger):
    app = FastAPI()
    app.add_middleware(AccessLogMiddleware)

    @app.get("/")
    async def index():
        return Response(status_code=204)

    TestClient(app).get("/")

    [line] = capsys.readouterr().out.splitlines()
    assert " - 204 GET / (d:" in line

def test_json_output_from_start_up_with_set_transformer(sink):
    chainlogger.set_transformer(json_transformer)
    app = make_app(use_json_transformer=True)
    chainlogger.info("startup")
    TestClient(app).get("/another")

    startup, access = (json.loads(text) for text in sink.texts("info"))
    assert startup["message"] == "startup"
    assert access["message"] == "- 200 GET /another"
