# mongo_converge/core/concurrency.py
# 동시 실행 제한 헬퍼 (세마포어 + gather)
# concurrency 0/None = 제한 없음

from __future__ import annotations
import asyncio
from typing import Any, Awaitable, Callable, Iterable, List, Optional, TypeVar

from mongo_converge.core.config import settings

T = TypeVar("T")
R = TypeVar("R")


class _Aborted(Exception):
    # 앞선 작업이 실패해서 시작하지 않은 작업 표시용
    pass


async def run_limited(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    concurrency: Optional[int] = 0,
) -> List[R]:
    """
    items 각각에 func 를 돌리고 결과를 입력 순서대로 돌려준다.
    - 동시에 도는 작업 수는 concurrency 이하
    - 하나라도 실패하면 아직 시작 안 한 작업은 건너뛰고,
      이미 돌고 있는 작업이 끝날 때까지 기다린 뒤 첫 에러를 올린다
    """
    items = list(items)
    if not items:
        return []

    sema = asyncio.Semaphore(concurrency) if concurrency and concurrency > 0 else None
    state = {"failed": False}

    async def _run(item: T) -> R:
        try:
            return await func(item)
        except BaseException:
            # 세마포어를 놓기 전에 표시해야 대기 중인 작업이 시작하지 않는다
            state["failed"] = True
            raise

    async def _task(item: T) -> R:
        if sema is None:
            return await _run(item)
        async with sema:
            if state["failed"]:
                raise _Aborted()
            return await _run(item)

    tasks = [asyncio.ensure_future(_task(it)) for it in items]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        state["failed"] = True
        # 남은 작업 정리 (결과/에러는 버린다. 첫 에러만 올림)
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def run_all(*steps: Callable[[], Awaitable[Any]]) -> List[Any]:
    # 인자 없는 코루틴 함수 여러 개를 동시에 실행
    return await run_limited(lambda step: step(), steps)


def resolve_concurrency(concurrency: Optional[int]) -> int:
    # 호출자가 안 주면 설정값 (CONVERGE_CONCURRENCY)
    return settings.CONVERGE_CONCURRENCY if concurrency is None else concurrency
