from encode_url_rule import FormQuery, QueryRequest


def test_get():
    request = QueryRequest("?id=123&name=a+b&id=456")
    assert request.get("id") == "456"
    assert request.get("name") == "a b"
    assert request.get("missing") is None
    assert request.get("missing", "x") == "x"
    assert "name" in request


def test_from_url():
    request = QueryRequest.from_url("http://example.com/site?_pi=abc%253D&x=%26#frag")
    assert request.get("_pi") == "abc%3D"
    assert request.get("x") == "&"
    assert request.query == "_pi=abc%253D&x=%26"


def test_from_url_without_query():
    request = QueryRequest.from_url("http://example.com/site")
    assert request.get("_pi") is None


def test_accepts_form_query():
    query = FormQuery({"a": "1"})
    assert QueryRequest(query).query is query
