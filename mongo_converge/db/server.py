# mongo_converge/db/server.py
# 서버 파라미터 동기화 (getParameter / setParameter)
# 주의: 서버 전체에 영향. 다른 값만, 하나씩 따로 set 한다.

from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple

from mongo_converge.core.concurrency import run_limited
from mongo_converge.core.errors import ServerParameterError
from mongo_converge.core.validators import parse_as, require_non_empty, require_whitelisted
from mongo_converge.db.wrappers import Database
from mongo_converge.models.whitelists import SERVER_PARAMETERS

log = logging.getLogger(__name__)


async def initialize_server(
    db: Database,
    params: Dict[str, Any],
    concurrency: Optional[int] = 0,
) -> Dict[str, Dict[str, Any]]:
    """
    결과: {param: {"ok": 1}}  (이미 같음)
          {param: {"updated": True, ...setParameter 결과}}
    """
    params = parse_as(Dict[str, Any], params)
    require_non_empty(params, "Server parameters")
    require_whitelisted(params, SERVER_PARAMETERS, "server parameter")

    admin = db.client.admin
    current = await admin.command({"getParameter": "*"})

    async def _apply(item: Tuple[str, Any]) -> Tuple[str, Dict[str, Any]]:
        param, value = item
        if param in current and current[param] == value:
            log.debug("server parameter %s already %r", param, value)
            return param, {"ok": 1}
        log.info("setParameter %s: %r -> %r", param, current.get(param), value)
        res = await admin.command({"setParameter": 1, param: value})
        if res.get("errmsg"):
            raise ServerParameterError(param, res["errmsg"])
        return param, {"updated": True, **res}

    return dict(await run_limited(_apply, params.items(), concurrency))
