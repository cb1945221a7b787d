import typing as _ty
import uritools as _uritools

_Value = str | int | float | None


class FormQuery(str):
    """An ``application/x-www-form-urlencoded`` query string.

    Only the RFC 3986 unreserved characters are left bare, spaces are
    written as ``+`` and a literal ``+`` as ``%2B``.
    """

    SEPARATOR = "&"
    ENCODING = "utf-8"

    def __new__(
        cls,
        query: (
            str
            | _ty.Sequence[tuple[str, _Value]]
            | _ty.Mapping[str, _Value | _ty.Sequence[_Value]]
        ) = "",
    ):
        if isinstance(query, str):
            pass
        elif isinstance(query, _ty.Mapping):
            query = cls._encode_items(_items(query))
        else:
            query = cls._encode_items(query)
        return str.__new__(cls, query)

    @classmethod
    def _quote(cls, text: _Value) -> str:
        if not isinstance(text, str):
            text = str(text)
        encoded = _uritools.uriencode(text, " ", cls.ENCODING).decode("ascii")
        return encoded.replace(" ", "+")

    @classmethod
    def _unquote(cls, text: str) -> str:
        return _uritools.uridecode(text.replace("+", " "), cls.ENCODING)

    @classmethod
    def _encode_items(cls, items: _ty.Iterable[tuple[str, _Value]]) -> str:
        terms = []
        for key, value in items:
            name = cls._quote(key)
            if value is None:
                terms.append(name)
            else:
                terms.append(f"{name}={cls._quote(value)}")
        return cls.SEPARATOR.join(terms)

    def decode(query) -> list[tuple[str, str]]:
        pairs = []
        for term in str(query).split(query.SEPARATOR):
            if not term:
                continue
            key, _, value = term.partition("=")
            pairs.append((query._unquote(key), query._unquote(value)))
        return pairs

    def to_dict(query):
        query_: dict[str, list[str]] = {}
        for k, v in query.decode():
            query_.setdefault(k, []).append(v)
        return query_

    def to_flat_dict(query) -> dict[str, str]:
        return dict(query.decode())


def _items(mapping: _ty.Mapping[str, _ty.Any]):
    for key, value in mapping.items():
        if isinstance(value, (list, tuple)):
            for item in value:
                yield key, item
        else:
            yield key, value
