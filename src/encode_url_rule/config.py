import typing as _ty

from .exceptions import ConfigError

DEFAULT_PARAM_NAME = "_pi"

_ALIASES = {
    "paramName": "param_name",
    "autoEncodeParams": "auto_encode_params",
}


class RuleConfig(_ty.NamedTuple):
    param_name: str = DEFAULT_PARAM_NAME
    auto_encode_params: frozenset[str] = frozenset()
    strict: bool = False

    @classmethod
    def from_options(cls, **options):
        """Build a config from rule options.

        Accepts both the framework spelling (``paramName``,
        ``autoEncodeParams``) and the python one.
        """
        values = {}
        for name, value in options.items():
            field = _ALIASES.get(name, name)
            if field not in cls._fields:
                raise ConfigError(f"Unknown rule option {name!r}")
            if field in values:
                raise ConfigError(f"Rule option {field!r} given twice")
            values[field] = value

        param_name = values.get("param_name", DEFAULT_PARAM_NAME)
        if not isinstance(param_name, str) or not param_name:
            raise ConfigError(f"paramName must be a non-empty string, not {param_name!r}")

        auto_encode = values.get("auto_encode_params") or ()
        if isinstance(auto_encode, str):
            auto_encode = (auto_encode,)
        auto_encode = frozenset(auto_encode)
        for key in auto_encode:
            if not isinstance(key, str):
                raise ConfigError(f"autoEncodeParams entries must be strings, not {key!r}")

        return cls(param_name, auto_encode, bool(values.get("strict", False)))

    def auto_encodes(self, key: str) -> bool:
        return key != self.param_name and key in self.auto_encode_params
