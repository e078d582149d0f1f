# mongo_converge/db/init.py
# Mongo 연결 유틸: motor
# 전역 커넥션은 두지 않는다. 호출마다 client 를 만들어 결과로 돌려주고 닫는 건 호출자 몫.

from __future__ import annotations
import logging
from typing import Any, Dict, Tuple

from motor.motor_asyncio import AsyncIOMotorClient

from mongo_converge.core.config import settings
from mongo_converge.core.errors import SpecValidationError
from mongo_converge.core.validators import parse_as
from mongo_converge.db.wrappers import Database
from mongo_converge.models.schemas import DatabaseSpec

log = logging.getLogger(__name__)


def load_spec(spec: Any) -> DatabaseSpec:
    spec = parse_as(DatabaseSpec, spec)
    if not spec.name and not settings.MONGO_DB:
        raise SpecValidationError("Database name must be a non-blank string.")
    return spec


async def open_db(spec: DatabaseSpec) -> Tuple[AsyncIOMotorClient, Database]:
    uri = spec.url or settings.MONGO_URI
    name = spec.name or settings.MONGO_DB

    client = AsyncIOMotorClient(uri, **spec.options)
    db = client[name]

    # 연결 확인 (준비 안 됐으면 예외)
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise
    log.info("connected to database %s", name)
    return client, Database(db)


async def connect_db(spec: Any) -> Dict[str, Any]:
    """
    연결만 한다 (동기화 없음).
    결과: {"client", "db", "collections": {이름: Collection}}
    """
    spec = load_spec(spec)
    client, db = await open_db(spec)
    collections = {c.name: db.collection(c.name) for c in spec.collections}
    return {"client": client, "db": db, "collections": collections}
