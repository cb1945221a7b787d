import typing as _ty
import uritools as _uritools

from .query import FormQuery


class QueryRequest:
    """Read-only view over the query string of a request."""

    __slots__ = ("_query", "_params")

    def __init__(self, query: str | FormQuery | _ty.Mapping[str, str] = ""):
        if isinstance(query, FormQuery):
            pass
        elif isinstance(query, str):
            query = FormQuery(query.removeprefix("?"))
        else:
            query = FormQuery(query)
        self._query = query
        self._params = query.to_flat_dict()

    @classmethod
    def from_url(cls, url: str):
        return cls(_uritools.urisplit(url).query or "")

    @property
    def query(self) -> FormQuery:
        return self._query

    def get(self, name: str, default: _ty.Any = None) -> _ty.Any:
        return self._params.get(name, default)

    def __contains__(self, name: str):
        return name in self._params

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, str(self._query))
