from .codec import JsonCodec, pack, unpack
from .config import DEFAULT_PARAM_NAME, RuleConfig
from .exceptions import ConfigError, DecodeError, EncodeUrlError, EncodingError
from .query import FormQuery
from .request import QueryRequest
from .rule import EncodeUrlRule, build_params, parse_params
from .protocols import JsonCodecProtocol, RequestProtocol, UrlRuleProtocol
