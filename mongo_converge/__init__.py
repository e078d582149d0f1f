# mongo_converge
# 선언한 스펙(컬렉션/옵션/인덱스/초기 데이터/서버 파라미터)에 맞게 MongoDB 를 맞춰 주는 라이브러리
#
#   from mongo_converge import connect
#   res = await connect({"name": "mydb", "collections": {...}}, initialize=True)
#   await res["collections"]["users"].find_one({...})
#   res["client"].close()

from mongo_converge.core.errors import ConvergeError, ServerParameterError, SpecValidationError
from mongo_converge.db.collections import drop_collections, ensure_collection
from mongo_converge.db.data import initialize_data
from mongo_converge.db.indexes import drop_indexes, ensure_indexes
from mongo_converge.db.init import connect_db
from mongo_converge.db.server import initialize_server
from mongo_converge.db.wrappers import Collection, Database
from mongo_converge.models.schemas import CollectionSpec, DatabaseSpec, IndexSpec
from mongo_converge.services.compare import index_has_changed, options_in_sync
from mongo_converge.startup.initialize import (
    connect,
    connect_and_initialize,
    initialize_all,
    initialize_collection,
    initialize_collections,
)

__all__ = [
    "connect",
    "connect_db",
    "connect_and_initialize",
    "initialize_all",
    "initialize_collection",
    "initialize_collections",
    "initialize_server",
    "ensure_collection",
    "ensure_indexes",
    "drop_indexes",
    "drop_collections",
    "initialize_data",
    "index_has_changed",
    "options_in_sync",
    "Database",
    "Collection",
    "DatabaseSpec",
    "CollectionSpec",
    "IndexSpec",
    "ConvergeError",
    "SpecValidationError",
    "ServerParameterError",
]
