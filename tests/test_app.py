"""App wiring — health check, error envelope, CORS."""


async def test_health(client):
    res = await client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/nope")

    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


async def test_cors_allows_any_origin_by_default(client):
    res = await client.get("/articles", headers={"Origin": "http://localhost:5173"})

    assert res.headers.get("access-control-allow-origin") == "*"
