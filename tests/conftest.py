# tests/conftest.py
# 테스트용 가짜 motor (메모리)
# - 호출 기록: client.calls 에 (동작, ...) 튜플로 쌓인다
# - 서버처럼 텍스트 인덱스 키를 _fts/_ftsx 로 접고 기본값(weights/언어)을 채운다
# - validator 가 있으면 validationLevel/validationAction 기본값을 채운다

from __future__ import annotations
import asyncio
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from pymongo.errors import CollectionInvalid, OperationFailure

from mongo_converge.db.wrappers import Database


class FakeCursor:
    def __init__(self, docs: List[dict]):
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[dict]:
        await asyncio.sleep(0)
        return list(self._docs if length is None else self._docs[:length])


def _server_index(keys: List[tuple], name: str, options: Dict[str, Any]) -> Dict[str, Any]:
    key: Dict[str, Any] = {}
    text_fields = []
    for field, direction in keys:
        if direction == "text":
            text_fields.append(field)
            if "_fts" not in key:
                key["_fts"] = "text"
                key["_ftsx"] = 1
        else:
            key[field] = direction
    desc = {"v": 2, "key": key, "name": name}
    desc.update(options)
    if text_fields:
        desc["weights"] = dict(options.get("weights") or {f: 1 for f in text_fields})
        desc.setdefault("default_language", "english")
        desc.setdefault("language_override", "language")
        desc.setdefault("textIndexVersion", 3)
    return desc


def _with_validation_defaults(options: Dict[str, Any]) -> Dict[str, Any]:
    options = dict(options)
    if "validator" in options:
        options.setdefault("validationLevel", "strict")
        options.setdefault("validationAction", "error")
    return options


class FakeCollection:
    def __init__(self, database: "FakeDatabase", name: str):
        self.database = database
        self.name = name

    @property
    def _state(self) -> Dict[str, Any]:
        return self.database._ensure(self.name)

    def _log(self, *call):
        self.database.client.calls.append(call)

    def list_indexes(self) -> FakeCursor:
        self._log("list_indexes", self.name)
        return FakeCursor(list(self._state["indexes"].values()))

    async def index_information(self) -> Dict[str, Dict[str, Any]]:
        await asyncio.sleep(0)
        self._log("index_information", self.name)
        out = {}
        for name, desc in self._state["indexes"].items():
            info = {k: v for k, v in desc.items() if k != "name"}
            info["key"] = list(desc["key"].items())
            out[name] = info
        return out

    async def create_index(self, keys, name: Optional[str] = None, **options) -> str:
        await asyncio.sleep(0)
        keys = list(keys)
        name = name or "_".join(f"{k}_{d}" for k, d in keys)
        self._log("create_index", self.name, name, keys, options)
        self._state["indexes"][name] = _server_index(keys, name, options)
        return name

    async def drop_index(self, name: str) -> None:
        await asyncio.sleep(0)
        self._log("drop_index", self.name, name)
        if name not in self._state["indexes"]:
            raise OperationFailure(f"index not found with name [{name}]", code=27)
        del self._state["indexes"][name]

    async def count_documents(self, filter: Dict[str, Any]) -> int:
        await asyncio.sleep(0)
        self._log("count_documents", self.name)
        return len(self._state["docs"])

    async def insert_one(self, doc: Dict[str, Any]):
        await asyncio.sleep(0)
        doc.setdefault("_id", ObjectId())
        self._log("insert_one", self.name, doc["_id"])
        self._state["docs"].append(dict(doc))

    async def update_one(self, filter: Dict[str, Any], update: Dict[str, Any], upsert: bool = False):
        await asyncio.sleep(0)
        self._log("update_one", self.name, filter, update, upsert)
        for doc in self._state["docs"]:
            if doc.get("_id") == filter.get("_id"):
                doc.update(update.get("$set", {}))
                return
        if upsert:
            self._state["docs"].append({**filter, **update.get("$setOnInsert", {}), **update.get("$set", {})})

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        await asyncio.sleep(0)
        for doc in self._state["docs"]:
            if all(doc.get(k) == v for k, v in filter.items()):
                return dict(doc)
        return None


class FakeDatabase:
    def __init__(self, client: "FakeClient", name: str):
        self.client = client
        self.name = name
        self.collections: Dict[str, Dict[str, Any]] = {}
        self.fail_commands: Dict[str, Exception] = {}

    def _ensure(self, name: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # 실제 서버처럼 insert/create_index 시 컬렉션이 암묵적으로 생긴다
        if name not in self.collections:
            self.collections[name] = {
                "options": _with_validation_defaults(options or {}),
                "indexes": {"_id_": {"v": 2, "key": {"_id": 1}, "name": "_id_"}},
                "docs": [],
            }
        return self.collections[name]

    def __getitem__(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    async def list_collections(self, filter: Optional[Dict[str, Any]] = None, **kwargs) -> FakeCursor:
        await asyncio.sleep(0)
        self.client.calls.append(("list_collections", filter))
        wanted = (filter or {}).get("name")
        out = []
        for name, state in self.collections.items():
            if isinstance(wanted, dict) and name not in wanted.get("$in", []):
                continue
            if isinstance(wanted, str) and name != wanted:
                continue
            out.append({"name": name, "type": "collection", "options": dict(state["options"])})
        return FakeCursor(out)

    async def create_collection(self, name: str, **options) -> FakeCollection:
        await asyncio.sleep(0)
        self.client.calls.append(("create_collection", name, options))
        if name in self.collections:
            raise CollectionInvalid(f"collection {name} already exists")
        self._ensure(name, options)
        return self[name]

    async def drop_collection(self, name: str) -> None:
        await asyncio.sleep(0)
        self.client.calls.append(("drop_collection", name))
        self.collections.pop(name, None)

    async def command(self, cmd: Any) -> Dict[str, Any]:
        await asyncio.sleep(0)
        if cmd == "ping":
            cmd = {"ping": 1}
        op = next(iter(cmd))
        self.client.calls.append(("command", dict(cmd)))
        if op in self.fail_commands:
            raise self.fail_commands[op]
        if op == "collMod":
            state = self.collections[cmd["collMod"]]
            state["options"].update({k: v for k, v in cmd.items() if k != "collMod"})
            state["options"] = _with_validation_defaults(state["options"])
        return {"ok": 1.0}


class FakeAdmin:
    def __init__(self, client: "FakeClient"):
        self.client = client
        self.params: Dict[str, Any] = {"notablescan": False, "cursorTimeoutMillis": 600000, "logLevel": 0}
        self.errors: Dict[str, str] = {}

    async def command(self, cmd: Dict[str, Any]) -> Dict[str, Any]:
        await asyncio.sleep(0)
        self.client.calls.append(("admin", dict(cmd)))
        if "getParameter" in cmd:
            return {**self.params, "ok": 1.0}
        (param, value), = [(k, v) for k, v in cmd.items() if k != "setParameter"]
        if param in self.errors:
            return {"ok": 0.0, "errmsg": self.errors[param]}
        was = self.params.get(param)
        self.params[param] = value
        return {"was": was, "ok": 1.0}


class FakeClient:
    def __init__(self, *args, **kwargs):
        self.args = args
        self.kwargs = kwargs
        self.calls: List[tuple] = []
        self.closed = False
        self.admin = FakeAdmin(self)
        self._dbs: Dict[str, FakeDatabase] = {}

    def __getitem__(self, name: str) -> FakeDatabase:
        if name not in self._dbs:
            self._dbs[name] = FakeDatabase(self, name)
        return self._dbs[name]

    def close(self) -> None:
        self.closed = True

    def ops(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def raw_db(client) -> FakeDatabase:
    return client["testdb"]


@pytest.fixture
def db(raw_db) -> Database:
    return Database(raw_db)


@pytest.fixture
def motor_client(monkeypatch, client):
    # AsyncIOMotorClient(uri, **options) → 항상 같은 가짜 client
    def _factory(*args, **kwargs):
        client.args = args
        client.kwargs = kwargs
        return client

    monkeypatch.setattr("mongo_converge.db.init.AsyncIOMotorClient", _factory)
    return client
