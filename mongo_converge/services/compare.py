# mongo_converge/services/compare.py
# 선언 vs 서버 상태 비교 (순수 함수, I/O 없음)
# - index_has_changed: 인덱스 정의가 바뀌었는지
# - options_in_sync: 컬렉션 옵션(collMod 대상)만 비교

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from mongo_converge.models.schemas import IndexSpec
from mongo_converge.models.whitelists import (
    INDEX_OPTIONS,
    MODIFIABLE_COLLECTION_OPTIONS,
    SERVER_ASSIGNED_INDEX_OPTIONS,
    TEXT_INDEX,
    TEXT_LANGUAGE_DEFAULTS,
    TEXT_ONLY_OPTIONS,
    TEXT_SYNTHETIC_KEYS,
    VALIDATION_DEFAULTS,
)


def project(doc: Mapping[str, Any] | None, fields: Iterable[str]) -> Dict[str, Any]:
    """doc 에서 fields 에 해당하는 키만 뽑는다 (없는 키는 빼고)"""
    doc = doc or {}
    return {k: doc[k] for k in fields if k in doc}


def _key_pairs(keys: Mapping[str, Any] | None) -> List[Tuple[str, Any]]:
    # 인덱스 키는 순서가 의미 있음 → dict 비교 대신 (field, dir) 리스트로 비교
    return list((keys or {}).items())


# === 인덱스 =================================================================

def _text_index_has_changed(declared: IndexSpec, live: Mapping[str, Any]) -> bool:
    # 서버는 텍스트 필드를 _fts/_ftsx 로 접어서 저장하고 언어/가중치 기본값을 채운다.
    # 그대로 비교하면 매번 "변경"으로 나와서 drop/recreate 가 반복된다.
    options = declared.options

    non_text = [(k, d) for k, d in declared.keys.items() if d != TEXT_INDEX]
    live_key = [(k, d) for k, d in _key_pairs(live.get("key")) if k not in TEXT_SYNTHETIC_KEYS]
    if non_text != live_key:
        return True

    languages = {k: options.get(k, default) for k, default in TEXT_LANGUAGE_DEFAULTS.items()}
    if languages != project(live, TEXT_LANGUAGE_DEFAULTS):
        return True

    # weights 가 없거나 비어 있으면 텍스트 필드마다 1
    weights = options.get("weights") or {k: 1 for k, d in declared.keys.items() if d == TEXT_INDEX}
    if dict(weights) != dict(live.get("weights") or {}):
        return True

    # textIndexVersion 은 서버가 정하는 값 → 양쪽 모두 비교에서 제외
    ignored = TEXT_ONLY_OPTIONS + ["textIndexVersion"]
    rest = [o for o in INDEX_OPTIONS if o not in ignored]
    return project(options, rest) != project(live, rest)


def index_has_changed(declared: IndexSpec, live: Mapping[str, Any]) -> bool:
    """선언된 인덱스와 list_indexes 로 받은 인덱스가 다르면 True"""
    if declared.is_text:
        return _text_index_has_changed(declared, live)
    if _key_pairs(declared.keys) != _key_pairs(live.get("key")):
        return True
    live_options = project(live, INDEX_OPTIONS)
    for k in SERVER_ASSIGNED_INDEX_OPTIONS:
        if k not in declared.options:
            live_options.pop(k, None)
    return declared.options != live_options


# === 컬렉션 옵션 =============================================================

def _effective_options(options: Mapping[str, Any] | None) -> Dict[str, Any]:
    out = project(options, MODIFIABLE_COLLECTION_OPTIONS)
    if "validator" in out:
        for k, default in VALIDATION_DEFAULTS.items():
            out.setdefault(k, default)
    return out


def options_in_sync(declared: Mapping[str, Any] | None, live: Mapping[str, Any] | None) -> bool:
    # capped/size 등은 생성 후 바꿀 수 없으니 비교 대상 아님
    return _effective_options(declared) == _effective_options(live)


def modifiable_options(options: Mapping[str, Any] | None) -> Dict[str, Any]:
    """collMod 에 실을 옵션만"""
    return project(options, MODIFIABLE_COLLECTION_OPTIONS)
