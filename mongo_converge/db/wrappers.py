# mongo_converge/db/wrappers.py
# motor 핸들을 감싸는 얇은 래퍼 (드라이버 클래스는 건드리지 않는다)
# - 동기화 메서드만 추가, 나머지 속성은 raw 로 그대로 넘김
#   예) collections["users"].find_one({...})  → raw.find_one(...)

from __future__ import annotations
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase


class Collection:
    def __init__(self, raw: AsyncIOMotorCollection):
        self.raw = raw

    @property
    def name(self) -> str:
        return self.raw.name

    def __getattr__(self, item: str) -> Any:
        return getattr(self.raw, item)

    def __repr__(self) -> str:
        return f"Collection({self.name!r})"

    async def ensure_indexes(self, indexes: Any, concurrency: Optional[int] = 0) -> Dict[str, List[str]]:
        from mongo_converge.db.indexes import ensure_indexes
        return await ensure_indexes(self, indexes, concurrency=concurrency)

    async def drop_indexes(self, names: List[str]) -> List[str]:
        from mongo_converge.db.indexes import drop_indexes
        return await drop_indexes(self, names)

    async def initialize_data(self, documents: List[dict], concurrency: Optional[int] = 0) -> Dict[str, int]:
        """
        초기 데이터 채우기
        - _id 있는 문서: $setOnInsert upsert (이미 있으면 안 건드림)
        - _id 없는 문서: 호출 시점에 컬렉션이 비어 있었을 때만 insert
        """
        from mongo_converge.db.data import initialize_data
        return await initialize_data(self, documents, concurrency=concurrency)


class Database:
    def __init__(self, raw: AsyncIOMotorDatabase):
        self.raw = raw

    @property
    def name(self) -> str:
        return self.raw.name

    @property
    def client(self):
        return self.raw.client

    def __getattr__(self, item: str) -> Any:
        return getattr(self.raw, item)

    def __getitem__(self, name: str) -> Collection:
        return self.collection(name)

    def __repr__(self) -> str:
        return f"Database({self.name!r})"

    def collection(self, name: str) -> Collection:
        return Collection(self.raw[name])

    async def ensure_collection(self, name: str, options: Optional[dict] = None) -> Collection:
        from mongo_converge.db.collections import ensure_collection
        return await ensure_collection(self, name, options)

    async def drop_collections(self, names: List[str]) -> List[str]:
        from mongo_converge.db.collections import drop_collections
        return await drop_collections(self, names)

    async def initialize_server(self, params: dict, concurrency: Optional[int] = 0) -> Dict[str, dict]:
        # 주의: 서버 전체에 적용되는 설정
        from mongo_converge.db.server import initialize_server
        return await initialize_server(self, params, concurrency=concurrency)

    async def initialize_collection(self, name: str, spec: Any = None, concurrency: Optional[int] = 0) -> Collection:
        from mongo_converge.startup.initialize import initialize_collection
        return await initialize_collection(self, name, spec, concurrency=concurrency)

    async def initialize_collections(self, specs: Any, concurrency: Optional[int] = 0) -> Dict[str, Collection]:
        from mongo_converge.startup.initialize import initialize_collections
        return await initialize_collections(self, specs, concurrency=concurrency)

    async def initialize_all(self, spec: Any, concurrency: Optional[int] = None) -> Dict[str, Any]:
        from mongo_converge.startup.initialize import initialize_all
        return await initialize_all(self, spec, concurrency=concurrency)
