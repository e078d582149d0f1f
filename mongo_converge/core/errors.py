# mongo_converge/core/errors.py
# 라이브러리 예외 정의
# 서버 명령 실패(OperationFailure 등)와 연결 실패(ConnectionFailure 등)는
# pymongo 예외를 그대로 올려보낸다. 여기서는 우리 쪽에서 만드는 것만.

from __future__ import annotations


class ConvergeError(Exception):
    """mongo_converge 공통 베이스"""


class SpecValidationError(ConvergeError, ValueError):
    """스펙 입력 오류 (형식/빈 값/허용 목록 밖의 키). I/O 전에 발생한다."""


class ServerParameterError(ConvergeError):
    """setParameter 결과에 errmsg 가 실려 온 경우"""

    def __init__(self, param: str, errmsg: str):
        self.param = param
        self.errmsg = errmsg
        super().__init__(f"Failed setting {param}: {errmsg}")
