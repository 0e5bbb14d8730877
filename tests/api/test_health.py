from server.main import CORS_HEADERS


def test_root(api_client):
    response = api_client.get("/")
    assert response.status_code == 200
    assert "Hello" in response.text

def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_responses_carry_cors_headers(api_client):
    response = api_client.get("/health")
    for header, value in CORS_HEADERS.items():
        assert response.headers[header] == value

def test_error_responses_carry_cors_headers(api_client):
    response = api_client.get("/api/books")
    assert response.status_code == 400
    assert response.headers["Access-Control-Allow-Origin"] == "*"

def test_options_is_always_answered(api_client):
    for path in ("/api/books", "/api/cron/check", "/does-not-exist"):
        response = api_client.options(path)
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Methods"] == "POST, GET, OPTIONS, PUT, DELETE"

def test_options_skips_cron_secret(api_client, app):
    app.state.config.CRON_SECRET = "s3cret"
    response = api_client.options("/api/cron/check")
    assert response.status_code == 200

def test_metrics(api_client):
    api_client.get("/health")
    response = api_client.get("/metrics")
    assert response.status_code == 200
    assert "tsundoku_http_requests_total" in response.text

def test_metrics_label_by_route_template(api_client):
    api_client.get("/health")
    api_client.get("/no/such/page-7f3a9c")
    api_client.get("/api/books?userId=abc")

    response = api_client.get("/metrics")
    assert 'endpoint="/health"' in response.text
    assert 'endpoint="/api/books"' in response.text
    assert 'endpoint="unmatched"' in response.text
    assert "page-7f3a9c" not in response.text
