import typing as _ty

_K = _ty.TypeVar("_K")
_V = _ty.TypeVar("_V")


def merge(base: _ty.Mapping[_K, _V], *overrides: _ty.Mapping[_K, _V]) -> dict[_K, _V]:
    """Shallow merge, later mappings win. Nested values are replaced whole."""
    merged = dict(base)
    for override in overrides:
        merged.update(override)
    return merged


def pop_present(params: dict[_K, _V], selected: _ty.Callable[[_K], bool]) -> dict[_K, _V]:
    """Remove and return the entries picked by ``selected`` whose value is not None."""
    taken: dict[_K, _V] = {}
    for key in list(params):
        if selected(key) and params[key] is not None:
            taken[key] = params.pop(key)
    return taken
