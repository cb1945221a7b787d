import base64
import math

import pytest

from encode_url_rule import (
    DecodeError,
    EncodingError,
    FormQuery,
    JsonCodec,
    pack,
    unpack,
)


def test_pack_wire_format():
    assert pack({"userId": 456, "page": 2}) == "dXNlcklkPTQ1NiZwYWdlPTI%3D"
    assert pack({"key2": "value2"}) == "a2V5Mj0lMjJ2YWx1ZTIlMjI%3D"
    assert (
        pack({"key2": "value2", "userId": 456, "page": 2})
        == "a2V5Mj0lMjJ2YWx1ZTIlMjImdXNlcklkPTQ1NiZwYWdlPTI%3D"
    )


def test_unpack_wire_format():
    assert unpack("a2V5Mj0lMjJ2YWx1ZTIlMjImdXNlcklkPTQ1NiZwYWdlPTI%3D") == {
        "key2": "value2",
        "userId": 456,
        "page": 2,
    }


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"a": None, "b": True, "c": 1.5, "d": "text with spaces & symbols=+/"},
        {"filter": {"tags": ["a", "b"], "active": False}, "ids": [1, 2, 3]},
        {"unicode": "héllo wörld ✓", "empty": "", "zero": 0},
        {"nested": [{"x": [[]]}, {}]},
    ],
)
def test_round_trip(data):
    assert unpack(pack(data)) == data


def test_pack_is_deterministic():
    data = {"b": [1, {"c": 2}], "a": "x"}
    assert pack(data) == pack(dict(data))


def test_pack_is_url_safe():
    packed = pack({"q": "???///+++===", "long": "x" * 100})
    assert set(packed) <= set(
        "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~%"
    )


def test_pack_unserializable():
    with pytest.raises(EncodingError) as excinfo:
        pack({"ok": 1, "handle": object()})
    assert excinfo.value.key == "handle"
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_pack_nan():
    with pytest.raises(EncodingError):
        pack({"x": math.nan})


def test_unpack_empty():
    assert unpack("") == {}


def test_unpack_missing_padding():
    assert unpack("dXNlcklkPTQ1NiZwYWdlPTI") == {"userId": 456, "page": 2}


@pytest.mark.parametrize("blob", ["!!!", "abc%", "a2V5*", "%2F%2F4%3D"])
def test_unpack_invalid(blob):
    with pytest.raises(DecodeError):
        unpack(blob)


def test_unpack_invalid_json_is_kept_raw():
    # a=notjson&b=%5B1%2C2%5D
    blob = "YT1ub3Rqc29uJmI9JTVCMSUyQzIlNUQ%3D"
    assert unpack(blob) == {"a": "notjson", "b": [1, 2]}


def test_unpack_invalid_json_strict():
    blob = "YT1ub3Rqc29uJmI9JTVCMSUyQzIlNUQ%3D"
    with pytest.raises(DecodeError) as excinfo:
        unpack(blob, strict=True)
    assert excinfo.value.key == "a"


class UpperJson(JsonCodec):
    def dumps(self, value):
        return super().dumps(value).upper()


def test_custom_json_codec():
    packed = pack({"k": "v"}, json_codec=UpperJson())
    assert unpack(packed) == {"k": "V"}


def test_custom_query_codec():
    calls = []

    def query_codec(query):
        calls.append(query)
        return FormQuery(query)

    assert unpack(pack({"k": 1}, query_codec=query_codec), query_codec=query_codec) == {
        "k": 1
    }
    assert calls[0] == {"k": "1"}


def _blob(query):
    return base64.b64encode(query.encode("ascii")).decode("ascii")


def test_unpack_invalid_utf8_escape():
    assert _blob("a=%FF") == "YT0lRkY="
    with pytest.raises(DecodeError) as excinfo:
        unpack(_blob("a=%FF"))
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_unpack_deeply_nested_json_is_kept_raw():
    data = unpack(_blob("a=" + "%5B" * 100000 + "&b=1"))
    assert data == {"a": "[" * 100000, "b": 1}


def test_unpack_deeply_nested_json_strict():
    with pytest.raises(DecodeError) as excinfo:
        unpack(_blob("a=" + "%5B" * 100000), strict=True)
    assert excinfo.value.key == "a"
