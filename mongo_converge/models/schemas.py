# mongo_converge/models/schemas.py
# Pydantic 모델 정의: 선언(스펙) 입력 스키마
# IndexSpec: 인덱스 1개
# CollectionSpec: 컬렉션 1개 (옵션/인덱스/레거시 인덱스/초기 데이터)
# DatabaseSpec: 전체 설정 (연결 + 컬렉션 + 드롭할 컬렉션 + 서버 파라미터)
from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mongo_converge.core.validators import (
    require_non_blank,
    require_non_empty,
    require_whitelisted,
)
from mongo_converge.models.whitelists import (
    COLLECTION_OPTIONS,
    INDEX_OPTIONS,
    SERVER_PARAMETERS,
    TEXT_INDEX,
)


def named_entries(value: Any) -> Any:
    # {name: {...}} → [{name, ...}] (리스트면 그대로)
    if isinstance(value, dict):
        out = []
        for name, conf in value.items():
            if isinstance(conf, BaseModel):
                conf = conf.model_dump(by_alias=True)
            out.append({"name": name, **(conf or {})})
        return out
    return value


class IndexSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    keys: Dict[str, Any]                                   # 순서 있음 {field: 1 | -1 | "text" ...}
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _v_name(cls, v):
        return require_non_blank(v, "Index name")

    @field_validator("keys")
    @classmethod
    def _v_keys(cls, v):
        return require_non_empty(v, "Index keys")

    @field_validator("options", mode="before")
    @classmethod
    def _v_options(cls, v):
        v = v or {}
        if isinstance(v, dict):
            require_whitelisted(v.keys(), INDEX_OPTIONS, "index option")
        return v

    @property
    def is_text(self) -> bool:
        return any(d == TEXT_INDEX for d in self.keys.values())

    def create_kwargs(self) -> Dict[str, Any]:
        # create_index(keys, **kwargs) 용
        return {"name": self.name, **self.options}


class CollectionSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str
    options: Dict[str, Any] = Field(default_factory=dict)
    indexes: Optional[List[IndexSpec]] = None
    drop_indexes: Optional[List[str]] = Field(default=None, alias="dropIndexes")
    data: Optional[List[Dict[str, Any]]] = None

    @field_validator("name")
    @classmethod
    def _v_name(cls, v):
        return require_non_blank(v, "Collection name")

    @field_validator("indexes", mode="before")
    @classmethod
    def _v_indexes(cls, v):
        return named_entries(v)

    @model_validator(mode="after")
    def _v_options(self):
        for k in self.options:
            if k not in COLLECTION_OPTIONS:
                raise ValueError(
                    f'Invalid collection option "{k}" specified for the {self.name} collection.'
                )
        return self


class DatabaseSpec(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = None                 # 없으면 settings.MONGO_DB
    url: Optional[str] = None                  # 없으면 settings.MONGO_URI
    options: Dict[str, Any] = Field(default_factory=dict)   # AsyncIOMotorClient 옵션
    collections: List[CollectionSpec] = Field(default_factory=list)
    drop_collections: List[str] = Field(default_factory=list, alias="dropCollections")
    server_parameters: Dict[str, Any] = Field(default_factory=dict, alias="serverParameters")

    @field_validator("collections", mode="before")
    @classmethod
    def _v_collections(cls, v):
        return named_entries(v) or []

    @field_validator("drop_collections", mode="before")
    @classmethod
    def _v_drop(cls, v):
        return v or []

    @field_validator("server_parameters", mode="before")
    @classmethod
    def _v_params(cls, v):
        v = v or {}
        if isinstance(v, dict):
            require_whitelisted(v.keys(), SERVER_PARAMETERS, "server parameter")
        return v
