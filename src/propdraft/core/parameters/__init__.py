# どこで: `src/propdraft/core/parameters/__init__.py`。
# 何を: パラメータ層（値・ストア・解決・JSON 変換）の公開エイリアスをまとめる。
# なぜ: pipeline/session から最小インポートで使えるようにするため。

from .codec import decode_parameter, decode_parameters, encode_parameter
from .param import BlueprintParameter, clamp_to_bounds
from .resolver import (
    CachedResolver,
    ParamResolver,
    ResolverFn,
    SemanticIndex,
    normalize_key,
    resolve_value,
)
from .store import ParamStore

__all__ = [
    "BlueprintParameter",
    "CachedResolver",
    "ParamResolver",
    "ParamStore",
    "ResolverFn",
    "SemanticIndex",
    "clamp_to_bounds",
    "decode_parameter",
    "decode_parameters",
    "encode_parameter",
    "normalize_key",
    "resolve_value",
]
