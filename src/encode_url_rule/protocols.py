"""Interfaces of the collaborators the encoded url rule is wired to."""

import abc as _abc
import typing as _ty

Params: _ty.TypeAlias = dict[str, _ty.Any]
ParseResult: _ty.TypeAlias = "tuple[str, Params] | None"


@_ty.runtime_checkable
class RequestProtocol(_ty.Protocol):
    @_abc.abstractmethod
    def get(self, name: str, default: _ty.Any = None) -> _ty.Any:
        """Return the query parameter ``name`` or ``default``."""


@_ty.runtime_checkable
class UrlRuleProtocol(_ty.Protocol):
    @_abc.abstractmethod
    def create_url(
        self, manager: _ty.Any, route: str, params: _ty.Mapping[str, _ty.Any]
    ) -> str | None: ...

    @_abc.abstractmethod
    def parse_request(
        self, manager: _ty.Any, request: RequestProtocol
    ) -> ParseResult: ...


class JsonCodecProtocol(_ty.Protocol):
    __slots__ = ()

    @_abc.abstractmethod
    def dumps(self, value: _ty.Any) -> str: ...
    @_abc.abstractmethod
    def loads(self, text: str) -> _ty.Any: ...


class EncodedQuery(_ty.Protocol):
    def __str__(self) -> str: ...
    def decode(self) -> list[tuple[str, str]]: ...


class QueryCodecProtocol(_ty.Protocol):
    def __call__(self, query: str | _ty.Mapping[str, str]) -> EncodedQuery: ...
