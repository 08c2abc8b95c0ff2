from seoscope.api.routers.systems import create_systems_router


def _get_endpoint(router, path: str, method: str):
    for route in router.routes:
        if getattr(route, "path", None) != path:
            continue
        methods = getattr(route, "methods", set())
        if method.upper() in methods:
            return route.endpoint
    raise AssertionError(f"No route found for {method} {path}")


def test_health():
    endpoint = _get_endpoint(create_systems_router({}), "/systems/health", "GET")
    resp = endpoint()
    assert resp["status"] == "healthy"
    assert resp["service"] == "seoscope"
    assert isinstance(resp["timestamp"], int)


def test_config_stringifies_values():
    env = {"CRAWL_DELAY": 1.5, "MAX_PAGES": 10, "SEOSCOPE_INSIGHTS_TIMEOUT": None}
    endpoint = _get_endpoint(create_systems_router(env), "/systems/config", "GET")
    assert endpoint() == {
        "environment": {"CRAWL_DELAY": "1.5", "MAX_PAGES": "10", "SEOSCOPE_INSIGHTS_TIMEOUT": None}
    }
