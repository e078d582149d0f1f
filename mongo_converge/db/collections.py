# mongo_converge/db/collections.py
# 컬렉션 보장 / 레거시 컬렉션 정리

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from mongo_converge.core.concurrency import run_limited
from mongo_converge.core.validators import parse_as, require_non_blank, require_whitelisted
from mongo_converge.db.wrappers import Collection, Database
from mongo_converge.models.whitelists import COLLECTION_OPTIONS
from mongo_converge.services.compare import modifiable_options, options_in_sync

log = logging.getLogger(__name__)


async def ensure_collection(db: Database, name: str, options: Optional[Dict[str, Any]] = None) -> Collection:
    """
    컬렉션이 있고 옵션이 선언과 같도록 맞춘다.
    - 없으면 옵션 그대로 생성
    - 있으면 collMod 가능한 옵션만 비교해서 다를 때만 collMod
      (capped/size 는 생성 후 못 바꾸므로 무시)
    """
    require_non_blank(name, "Collection name")
    options = dict(options or {})
    require_whitelisted(options, COLLECTION_OPTIONS, f"collection option for the {name} collection")

    cursor = await db.raw.list_collections(filter={"name": name})
    found = await cursor.to_list(length=None)
    if not found:
        log.info("create collection %s options=%s", name, options)
        await db.raw.create_collection(name, **options)
        return db.collection(name)

    live = found[0].get("options") or {}
    if options_in_sync(options, live):
        log.debug("collection %s options in sync", name)
        return db.collection(name)

    cmd = {"collMod": name, **modifiable_options(options)}
    log.info("collMod %s", cmd)
    await db.raw.command(cmd)
    return db.collection(name)


async def drop_collections(db: Database, names: List[str]) -> List[str]:
    """names 중 실제로 있는 컬렉션만 드롭하고 드롭한 이름 목록을 돌려준다."""
    names = parse_as(List[str], names)
    if not names:
        return []

    # motor: list_collections 는 코루틴 → 커서
    cursor = await db.raw.list_collections(filter={"name": {"$in": names}}, nameOnly=True)
    existing = await cursor.to_list(length=None)

    async def _drop(info: Dict[str, Any]) -> str:
        log.info("drop collection %s", info["name"])
        await db.raw.drop_collection(info["name"])
        return info["name"]

    return await run_limited(_drop, existing)
