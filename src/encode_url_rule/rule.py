"""Url rule that carries structured parameters in one encoded query value.

Example::

    rule = EncodeUrlRule(base_rule, paramName="enc", autoEncodeParams=["page", "userId"])
    rule.create_url(manager, "site/url-test", {"id": 123, "userId": 456, "page": 2})
    # -> site/url-test?id=123&enc=dXNlcklkPTQ1NiZwYWdlPTI%253D

and the same rule restores ``userId`` and ``page`` into the parameters of
the matched route when parsing a request for that url.
"""

import typing as _ty

from loguru import logger

from . import codec as _codec, utils as _utils
from .config import RuleConfig
from .exceptions import DecodeError, EncodingError

if _ty.TYPE_CHECKING:
    from .protocols import (
        JsonCodecProtocol,
        ParseResult,
        QueryCodecProtocol,
        RequestProtocol,
        UrlRuleProtocol,
    )

_DEFAULT_CONFIG = RuleConfig()


def build_params(
    params: _ty.Mapping[str, _ty.Any],
    config: RuleConfig = _DEFAULT_CONFIG,
    *,
    json_codec: "JsonCodecProtocol | None" = None,
    query_codec: "QueryCodecProtocol | None" = None,
) -> dict[str, _ty.Any]:
    """Move the auto-encoded parameters of ``params`` into the encoded value.

    A string already under the reserved name is unpacked first and a
    mapping there is taken as is, so both can be extended. When nothing
    ends up encoded, an empty string or mapping under the reserved name is
    dropped instead of being sent as an empty value. Returns a new dict;
    ``params`` is left untouched.
    """
    name = config.param_name
    params = dict(params)
    current = params.get(name)

    if current is None:
        blob = {}
    elif isinstance(current, str):
        blob = _codec.unpack(
            current, strict=True, json_codec=json_codec, query_codec=query_codec
        )
    elif isinstance(current, _ty.Mapping):
        blob = dict(current)
    else:
        raise EncodingError(
            f"Expected an encoded string or a mapping, got {type(current).__name__}",
            name,
        )

    blob.update(_utils.pop_present(params, config.auto_encodes))

    if blob:
        params[name] = _codec.pack(blob, json_codec=json_codec, query_codec=query_codec)
    elif current is not None:
        del params[name]
    return params


def parse_params(
    route: str,
    params: _ty.Mapping[str, _ty.Any],
    request: "RequestProtocol",
    config: RuleConfig = _DEFAULT_CONFIG,
    *,
    json_codec: "JsonCodecProtocol | None" = None,
    query_codec: "QueryCodecProtocol | None" = None,
) -> tuple[str, dict[str, _ty.Any]]:
    """Merge the encoded value of ``request`` into the route parameters.

    Decoded entries win over route parameters with the same name.
    """
    params = dict(params)
    blob = request.get(config.param_name)
    if not blob:
        return route, params
    if not isinstance(blob, str):
        if config.strict:
            raise DecodeError("Expected an encoded string", config.param_name)
        logger.warning(f"Ignoring non-string {config.param_name!r} parameter")
        return route, params

    try:
        decoded = _codec.unpack(
            blob, strict=config.strict, json_codec=json_codec, query_codec=query_codec
        )
    except DecodeError as e:
        if config.strict:
            raise
        logger.warning(f"Ignoring malformed {config.param_name!r} parameter: {e}")
        return route, params

    return route, _utils.merge(params, decoded)


class EncodeUrlRule:
    """Wraps a url rule so structured parameters round trip through urls.

    Everything except :meth:`create_url` and :meth:`parse_request` is
    forwarded to the wrapped rule.
    """

    __slots__ = ("_rule", "_config", "_json_codec", "_query_codec")

    def __init__(
        self,
        rule: "UrlRuleProtocol",
        config: RuleConfig | None = None,
        /,
        *,
        json_codec: "JsonCodecProtocol | None" = None,
        query_codec: "QueryCodecProtocol | None" = None,
        **options,
    ):
        if config is None:
            config = RuleConfig.from_options(**options)
        elif options:
            raise TypeError("Pass either a RuleConfig or rule options, not both")
        self._rule = rule
        self._config = config
        self._json_codec = json_codec
        self._query_codec = query_codec

    @property
    def rule(self) -> "UrlRuleProtocol":
        return self._rule

    @property
    def config(self) -> RuleConfig:
        return self._config

    @property
    def param_name(self) -> str:
        return self._config.param_name

    def build_params(self, params: _ty.Mapping[str, _ty.Any]) -> dict[str, _ty.Any]:
        return build_params(
            params,
            self._config,
            json_codec=self._json_codec,
            query_codec=self._query_codec,
        )

    def parse_params(
        self, route: str, params: _ty.Mapping[str, _ty.Any], request: "RequestProtocol"
    ) -> tuple[str, dict[str, _ty.Any]]:
        return parse_params(
            route,
            params,
            request,
            self._config,
            json_codec=self._json_codec,
            query_codec=self._query_codec,
        )

    def create_url(self, manager, route: str, params: _ty.Mapping[str, _ty.Any]):
        return self._rule.create_url(manager, route, self.build_params(params))

    def parse_request(self, manager, request: "RequestProtocol") -> "ParseResult":
        parsed = self._rule.parse_request(manager, request)
        if not parsed:
            return parsed
        route, params = parsed
        return self.parse_params(route, params, request)

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._rule, name)

    def __repr__(self):
        return "{}({!r}, {!r})".format(type(self).__name__, self._rule, self._config)
