# mongo_converge/core/validators.py
# 공용 입력 검증기: 스키마(pydantic) 안에서도, 함수 진입점에서도 같이 쓴다.

from __future__ import annotations
from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from mongo_converge.core.errors import SpecValidationError

M = TypeVar("M")


def require_non_blank(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SpecValidationError(f"{what} must be a non-blank string.")
    return value


def require_non_empty(value: Any, what: str) -> Any:
    if not value:
        raise SpecValidationError(f"{what} must not be empty.")
    return value


def require_whitelisted(keys: Iterable[str], allowed: Iterable[str], what: str) -> None:
    # 첫 번째로 걸리는 키 이름을 에러에 그대로 싣는다
    allowed = set(allowed)
    for k in keys:
        if k not in allowed:
            raise SpecValidationError(f"Invalid {what}: {k}.")


def _messages(e: ValidationError) -> str:
    out = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "")
        out.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(out)


def parse_as(model: Type[M], data: Any) -> M:
    """pydantic 검증 실패를 SpecValidationError 로 바꿔서 올린다."""
    try:
        if isinstance(model, type) and issubclass(model, BaseModel):
            return model.model_validate(data)
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        raise SpecValidationError(_messages(e)) from e
