"""Write endpoints are registered with the shared rate limiter."""

from fastapi.routing import APIRoute

from recruit_crm.api.app import app
from recruit_crm.api.limiter import limiter

WRITE_METHODS = {"POST", "PATCH", "DELETE"}


def _limited(route: APIRoute) -> bool:
    name = f"{route.endpoint.__module__}.{route.endpoint.__name__}"
    return bool(limiter._route_limits.get(name))


def test_every_write_route_is_rate_limited():
    write_routes = [r for r in app.routes if isinstance(r, APIRoute) and r.methods & WRITE_METHODS]

    unlimited = [f"{sorted(r.methods)} {r.path}" for r in write_routes if not _limited(r)]

    # companies, contacts: 3 own + 3 kinds x 3 nested each; field definitions: 3
    assert len(write_routes) == 2 * (3 + 9) + 3
    assert unlimited == []


def test_read_routes_are_not_rate_limited():
    read_routes = [r for r in app.routes if isinstance(r, APIRoute) and r.methods == {"GET"}]

    assert read_routes
    assert not any(_limited(r) for r in read_routes)


def test_nested_routes_use_separate_buckets():
    names = [
        f"{r.endpoint.__module__}.{r.endpoint.__name__}"
        for r in app.routes
        if isinstance(r, APIRoute) and r.methods & WRITE_METHODS
    ]

    assert len(names) == len(set(names))
