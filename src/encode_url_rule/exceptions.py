import typing as _ty


class EncodeUrlError(ValueError):
    """Base class for errors raised while packing or unpacking url parameters."""

    def __init__(self, message: str, key: _ty.Optional[str] = None):
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        message = super().__str__()
        if self.key is not None:
            return f"{message} (key={self.key!r})"
        return message


class EncodingError(EncodeUrlError):
    """A value destined for the encoded parameter can't be serialized."""


class DecodeError(EncodeUrlError):
    """An encoded parameter is not valid base64, text or json."""


class ConfigError(EncodeUrlError):
    pass
