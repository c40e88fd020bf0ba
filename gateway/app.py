#!/usr/bin/env python3
"""
app.py – HTTP front door for the scanner and the quote proxy
------------------------------------------------------------
Endpoints
---------
GET /api/scan            run one scan pass, JSON report (500 + text on failure)
GET /api/sina?list=...   pass-through to hq.sinajs.cn with CORS + 5 s s-maxage
GET /status              liveness + effective scan settings

Environment
-----------
API_PORT          listen port                     (default: 8000)
REQUEST_TIMEOUT   seconds per upstream request    (default: 10)
"""

from __future__ import annotations

from typing import Optional

import requests
import uvicorn
from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from shared.config    import env
from shared.constants import SINA_QUOTE_URL
from shared.logging   import get_logger
from signal_scanner   import ScanConfig, run_from_env

log = get_logger("gateway")

SINA_HEADERS = {
    "Referer": "https://finance.sina.com.cn/",
    "User-Agent": "Mozilla/5.0",
    "Accept": "*/*",
}
SINA_FALLBACK_TYPE = "text/javascript; charset=GBK"

app = FastAPI(title="RVC Alerts", docs_url=None, redoc_url=None)


@app.get("/api/scan")
def scan():
    try:
        report = run_from_env()
    except Exception as exc:  # noqa: BLE001
        log.error("scan failed – %s", exc, exc_info=True)
        return PlainTextResponse(str(exc) or "err", status_code=500)
    return report.to_dict()


@app.get("/api/sina")
def sina_quote(list_: Optional[str] = Query(default=None, alias="list")):
    if not list_:
        return PlainTextResponse("missing ?list=...", status_code=400)

    try:
        r = requests.get(
            SINA_QUOTE_URL + list_,
            headers=SINA_HEADERS,
            timeout=env("REQUEST_TIMEOUT", 10.0, float),
        )
    except requests.RequestException as exc:
        log.error("quote upstream unreachable – %s", exc)
        return PlainTextResponse("upstream unreachable", status_code=502)

    headers = {
        "Access-Control-Allow-Origin": "*",
        "Cache-Control": "public, max-age=0, s-maxage=5",
        "Content-Type": r.headers.get("content-type") or SINA_FALLBACK_TYPE,
    }
    return Response(content=r.content, status_code=r.status_code, headers=headers)


@app.get("/status")
def status():
    cfg = ScanConfig.from_env()
    return JSONResponse({"ok": True, "scan": cfg.summary()})


def main() -> None:
    port = env("API_PORT", 8000, int)
    log.info("gateway listening on :%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")


if __name__ == "__main__":
    main()
