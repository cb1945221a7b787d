"""Pack and unpack a mapping of structured values into one url-safe string.

The wire layout of a packed value is::

    rawurlencode(base64(form_encode({key: json(value)})))

and :func:`unpack` undoes each layer in reverse order.
"""

import base64 as _base64
import binascii as _binascii
import json as _json
import typing as _ty

import uritools as _uritools
from loguru import logger

from .exceptions import DecodeError, EncodingError
from .query import FormQuery

if _ty.TYPE_CHECKING:
    from .protocols import JsonCodecProtocol, QueryCodecProtocol


class JsonCodec:
    """Compact json, no ascii escaping and no NaN/Infinity."""

    __slots__ = ("_encoder", "_decoder")

    def __init__(self):
        self._encoder = _json.JSONEncoder(
            ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
        self._decoder = _json.JSONDecoder()

    def dumps(self, value: _ty.Any) -> str:
        return self._encoder.encode(value)

    def loads(self, text: str) -> _ty.Any:
        return self._decoder.decode(text)


DEFAULT_JSON_CODEC = JsonCodec()


def pack(
    data: _ty.Mapping[str, _ty.Any],
    *,
    json_codec: "JsonCodecProtocol | None" = None,
    query_codec: "QueryCodecProtocol | None" = None,
) -> str:
    json_codec = json_codec or DEFAULT_JSON_CODEC
    query_codec = query_codec or FormQuery

    serialized: dict[str, str] = {}
    for key, value in data.items():
        try:
            serialized[key] = json_codec.dumps(value)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Cannot serialize value to json: {e}", key) from e

    query = str(query_codec(serialized))
    encoded = _base64.b64encode(query.encode("utf-8")).decode("ascii")
    return _uritools.uriencode(encoded, "").decode("ascii")


def unpack(
    blob: str,
    *,
    strict: bool = False,
    json_codec: "JsonCodecProtocol | None" = None,
    query_codec: "QueryCodecProtocol | None" = None,
) -> dict[str, _ty.Any]:
    """Inverse of :func:`pack`.

    A value that is not valid json is kept as its raw string unless
    ``strict`` is set, in which case :class:`DecodeError` is raised.
    Failures of the percent, base64 and form layers always raise.
    """
    json_codec = json_codec or DEFAULT_JSON_CODEC
    query_codec = query_codec or FormQuery

    if not blob:
        return {}

    try:
        text = _uritools.uridecode(blob)
    except UnicodeError as e:
        raise DecodeError(f"Invalid percent-encoded data: {e}") from e
    text = _b64decode(text)
    try:
        pairs = query_codec(text).decode()
    except UnicodeError as e:
        raise DecodeError(f"Invalid form-encoded data: {e}") from e
    data: dict[str, _ty.Any] = {}
    for key, value in pairs:
        try:
            data[key] = json_codec.loads(value)
        except (ValueError, RecursionError) as e:
            if strict:
                raise DecodeError(f"Invalid json value: {e}", key) from e
            logger.debug(f"Keeping raw value for {key!r}, not valid json: {e}")
            data[key] = value
    return data


def _b64decode(text: str) -> str:
    text = text.strip()
    text += "=" * (-len(text) % 4)
    try:
        raw = _base64.b64decode(text, validate=True)
    except (_binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 data: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Decoded data is not utf-8 text: {e}") from e
