import pytest
import uritools

from encode_url_rule import FormQuery, QueryRequest


class UrlRequest(QueryRequest):
    __slots__ = ("path",)

    def __init__(self, url: str):
        parts = uritools.urisplit(url)
        super().__init__(parts.query or "")
        self.path = parts.path.lstrip("/")


class StaticRule:
    """Matches a single route, route params are read from the query."""

    def __init__(self, route, param_keys=()):
        self.route = route
        self.param_keys = tuple(param_keys)
        self.created = []

    def create_url(self, manager, route, params):
        if route != self.route:
            return None
        self.created.append(dict(params))
        query = FormQuery({k: v for k, v in params.items() if v is not None})
        return f"{route}?{query}" if query else route

    def parse_request(self, manager, request):
        if request.path != self.route:
            return None
        params = {}
        for key in self.param_keys:
            value = request.get(key)
            if value is not None:
                params[key] = value
        return self.route, params


@pytest.fixture
def base_rule():
    return StaticRule("site/url-test", ("id",))


@pytest.fixture
def make_request():
    return UrlRequest
