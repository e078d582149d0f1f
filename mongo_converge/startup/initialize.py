# mongo_converge/startup/initialize.py
# 전체 동기화 순서
#   connect → 서버 파라미터 → 컬렉션들(컬렉션 → 인덱스/레거시 인덱스/데이터) → 레거시 컬렉션 드롭
# 앱 시작(배포/재시작/CI)마다 그대로 다시 돌려도 되는 것이 전제.

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from mongo_converge.core.concurrency import resolve_concurrency, run_all, run_limited
from mongo_converge.core.validators import parse_as, require_non_blank, require_non_empty
from mongo_converge.db.collections import drop_collections, ensure_collection
from mongo_converge.db.data import initialize_data
from mongo_converge.db.indexes import drop_indexes, ensure_indexes
from mongo_converge.db.init import connect_db, load_spec, open_db
from mongo_converge.db.server import initialize_server
from mongo_converge.db.wrappers import Collection, Database
from mongo_converge.models.schemas import CollectionSpec, DatabaseSpec, named_entries

log = logging.getLogger(__name__)


def _collection_spec(name: str, spec: Any) -> CollectionSpec:
    require_non_blank(name, "Collection name")
    if isinstance(spec, CollectionSpec):
        return spec if spec.name == name else spec.model_copy(update={"name": name})
    return parse_as(CollectionSpec, {**(spec or {}), "name": name})


async def initialize_collection(
    db: Database,
    name: str,
    spec: Any = None,
    concurrency: Optional[int] = 0,
) -> Collection:
    """
    컬렉션 1개 동기화
    1) 컬렉션 존재/옵션 보장 (인덱스/데이터는 컬렉션이 있어야 하므로 먼저)
    2) 그 다음 동시에: 인덱스 보장, 레거시 인덱스 드롭, 초기 데이터
    하나라도 실패하면 전체 실패.
    """
    spec = _collection_spec(name, spec)
    col = await ensure_collection(db, spec.name, spec.options)

    steps = []
    if spec.indexes:
        steps.append(lambda: ensure_indexes(col, spec.indexes, concurrency=concurrency))
    if spec.drop_indexes:
        steps.append(lambda: drop_indexes(col, spec.drop_indexes))
    if spec.data is not None:
        steps.append(lambda: initialize_data(col, spec.data, concurrency=concurrency))
    await run_all(*steps)
    return col


async def initialize_collections(
    db: Database,
    specs: Any,
    concurrency: Optional[int] = 0,
) -> Dict[str, Collection]:
    """여러 컬렉션 동기화. 결과: {이름: Collection}. 하나라도 실패하면 전체 실패."""
    specs = parse_as(List[CollectionSpec], named_entries(specs))
    require_non_empty(specs, "Collections")

    async def _init(spec: CollectionSpec):
        return spec.name, await initialize_collection(db, spec.name, spec, concurrency=concurrency)

    return dict(await run_limited(_init, specs, concurrency))


async def initialize_all(db: Database, spec: Any, concurrency: Optional[int] = None) -> Dict[str, Any]:
    """
    이미 열린 db 에 대해 전체 동기화 (연결은 건드리지 않음)
    결과: {"server_parameters"?, "collections"?, "dropped_collections"?}
    """
    if not isinstance(spec, DatabaseSpec):
        spec = parse_as(DatabaseSpec, spec)
    concurrency = resolve_concurrency(concurrency)

    results: Dict[str, Any] = {}
    if spec.server_parameters:
        results["server_parameters"] = await initialize_server(
            db, spec.server_parameters, concurrency=concurrency
        )
    if spec.collections:
        results["collections"] = await initialize_collections(db, spec.collections, concurrency=concurrency)
    if spec.drop_collections:
        results["dropped_collections"] = await drop_collections(db, spec.drop_collections)
    return results


async def connect_and_initialize(spec: Any, concurrency: Optional[int] = None) -> Dict[str, Any]:
    """
    연결 + 전체 동기화
    결과: {"client", "db", "collections", "dropped_collections"?, "server_parameters"?}
    실패하면 client 를 닫고(호출자는 client 를 받을 방법이 없으므로) 에러에 client 를 붙여서 다시 올린다.
    """
    spec = load_spec(spec)
    client, db = await open_db(spec)
    try:
        results = await initialize_all(db, spec, concurrency=concurrency)
    except Exception as e:
        log.warning("initialize failed, closing client: %s", e)
        client.close()
        e.client = client
        raise
    return {"collections": {}, **results, "client": client, "db": db}


async def connect(spec: Any, initialize: bool = False, concurrency: Optional[int] = None) -> Dict[str, Any]:
    """
    진입점
    - initialize=False: 연결만 ({"client", "db", "collections"})
    - initialize=True : 연결 + 서버 파라미터/컬렉션/드롭 동기화
    """
    if initialize:
        return await connect_and_initialize(spec, concurrency=concurrency)
    return await connect_db(spec)
