# mongo_converge/db/data.py
# 초기(시드) 데이터 채우기

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from mongo_converge.core.concurrency import run_limited
from mongo_converge.core.validators import parse_as
from mongo_converge.db.wrappers import Collection

log = logging.getLogger(__name__)

INSERTED = "inserted"
UPSERTED = "upserted"
SKIPPED = "skipped"


async def initialize_data(
    collection: Collection,
    documents: List[Dict[str, Any]],
    concurrency: Optional[int] = 0,
) -> Dict[str, int]:
    """
    문서마다 따로 처리. 호출 시점의 문서 수를 한 번만 보고 정한다.
    - _id 있음: {"$setOnInsert": doc} upsert → 없을 때만 생성, 있으면 안 건드림
    - _id 없음: 컬렉션이 비어 있었으면 insert, 아니면 skip
      (_id 없는 문서는 중복 판단 기준이 없어서 "비어 있음"만 믿는다)
    """
    documents = parse_as(List[Dict[str, Any]], documents)
    result = {INSERTED: 0, UPSERTED: 0, SKIPPED: 0}
    if not documents:
        return result

    count = await collection.raw.count_documents({})

    async def _seed(doc: Dict[str, Any]) -> str:
        doc_id = doc.get("_id")
        if doc_id is None:
            if count:
                return SKIPPED
            # insert_one 이 _id 를 채워 넣으니 복사본으로
            await collection.raw.insert_one(dict(doc))
            return INSERTED
        await collection.raw.update_one({"_id": doc_id}, {"$setOnInsert": doc}, upsert=True)
        return UPSERTED

    for outcome in await run_limited(_seed, documents, concurrency):
        result[outcome] += 1
    log.info(
        "seed %s: inserted=%d upserted=%d skipped=%d",
        collection.name, result[INSERTED], result[UPSERTED], result[SKIPPED],
    )
    return result
