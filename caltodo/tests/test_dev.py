from caltodo.app.dev import setup_dev_client


def test_without_dev_server_only_warns(context, caplog):
    setup_dev_client(context.http_server, context.app)
    assert "dev_client" not in context.app.view_functions
    assert "CLIENT_DEV_SERVER_URL is not set" in caplog.text


def test_client_routes_redirect_to_dev_server(context):
    context.app.config["CLIENT_DEV_SERVER_URL"] = "http://localhost:5173/"
    setup_dev_client(context.http_server, context.app)
    client = context.app.test_client()

    resp = client.get("/settings?tab=calendar")
    assert resp.status_code == 307
    assert resp.headers["Location"] == "http://localhost:5173/settings?tab=calendar"

    resp = client.get("/")
    assert resp.headers["Location"] == "http://localhost:5173/"

    assert client.get("/api/tasks").status_code == 404
