# mongo_converge/db/indexes.py
# 컬렉션 인덱스 동기화
# - 없으면 생성
# - 스펙이 다르면 드롭 후 재생성 (원자적이지 않음. 중간에 죽으면 재실행으로 복구)
# - 같으면 그대로

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from mongo_converge.core.concurrency import run_limited
from mongo_converge.core.validators import parse_as, require_non_empty
from mongo_converge.db.wrappers import Collection
from mongo_converge.models.schemas import IndexSpec, named_entries
from mongo_converge.services.compare import index_has_changed

log = logging.getLogger(__name__)

CREATED = "created"
MODIFIED = "modified"
UNCHANGED = "unchanged"


def normalize_indexes(indexes: Any) -> List[IndexSpec]:
    """{name: {keys, options}} 또는 [{name, keys, options}] → List[IndexSpec]"""
    specs = parse_as(List[IndexSpec], named_entries(indexes))
    return require_non_empty(specs, "Index list")


async def load_existing_indexes(collection: Collection) -> Dict[str, Dict[str, Any]]:
    # list_indexes 는 커서를 바로 돌려줌 (코루틴 아님)
    existing = await collection.raw.list_indexes().to_list(length=None)
    return {idx["name"]: idx for idx in existing}


async def _create(collection: Collection, spec: IndexSpec) -> None:
    await collection.raw.create_index(list(spec.keys.items()), **spec.create_kwargs())


async def ensure_indexes(
    collection: Collection,
    indexes: Any,
    concurrency: Optional[int] = 0,
) -> Dict[str, List[str]]:
    """
    선언된 인덱스를 서버와 맞춘다. 결과는 비어 있지 않은 분류만 담는다.
        {"created": [...], "modified": [...], "unchanged": [...]}
    순서는 보장하지 않음 (분류가 의미 있는 결과)
    """
    specs = normalize_indexes(indexes)  # 네트워크 호출 전에 검증
    existing = await load_existing_indexes(collection)

    async def _sync(spec: IndexSpec) -> Tuple[str, str]:
        live = existing.get(spec.name)
        if live is None:
            log.info("create index %s.%s keys=%s", collection.name, spec.name, spec.keys)
            await _create(collection, spec)
            return spec.name, CREATED
        if not index_has_changed(spec, live):
            log.debug("index %s.%s unchanged", collection.name, spec.name)
            return spec.name, UNCHANGED
        log.info("recreate index %s.%s keys=%s", collection.name, spec.name, spec.keys)
        await collection.raw.drop_index(spec.name)
        await _create(collection, spec)
        return spec.name, MODIFIED

    result: Dict[str, List[str]] = {CREATED: [], MODIFIED: [], UNCHANGED: []}
    for name, outcome in await run_limited(_sync, specs, concurrency):
        result[outcome].append(name)
    return {k: v for k, v in result.items() if v}


async def drop_indexes(collection: Collection, names: List[str]) -> List[str]:
    """레거시 인덱스 정리: 있는 것만 드롭 (확인 후 드롭이라 원자적이진 않음)"""
    names = parse_as(List[str], names)
    if not names:
        return []
    info = await collection.raw.index_information()
    targets = [n for n in names if n in info]

    async def _drop(name: str) -> str:
        log.info("drop index %s.%s", collection.name, name)
        await collection.raw.drop_index(name)
        return name

    return await run_limited(_drop, targets)
