import json

from lotar.api_server import NOT_FOUND_RESPONSE, ApiServer
from lotar.routes import initialize


def test_test_route_returns_ok(capsys):
    server = ApiServer()
    initialize(server)
    response = server.handle_request("/api/test")
    assert response == '{"result": "OK"}'
    assert json.loads(response) == {"result": "OK"}
    assert "Executing test handler for path: /api/test" in capsys.readouterr().out


def test_test_route_matches_subpaths(capsys):
    server = ApiServer()
    initialize(server)
    assert server.handle_request("/API/Test/more") == '{"result": "OK"}'
    assert "/API/Test/more" in capsys.readouterr().out


def test_other_paths_not_found():
    server = ApiServer()
    initialize(server)
    assert server.handle_request("/api/other") == NOT_FOUND_RESPONSE