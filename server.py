#!/usr/bin/env python3
"""
Document proxy service
Forwards the upstream filing to the search UI. Run this file to start it.
"""

import logging

import requests
import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse, Response

from config import Config
from utils.helpers import configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="Document Highlight Search Proxy", version="1.0.0")


def fetch_upstream() -> requests.Response:
    """Request the fixed upstream document with the identifying header"""
    response = requests.get(
        Config.UPSTREAM_URL,
        headers={"User-Agent": Config.USER_AGENT},
        timeout=Config.UPSTREAM_TIMEOUT
    )
    response.raise_for_status()
    return response


@app.get(Config.PROXY_ENDPOINT)
def proxy_document():
    """Return the upstream document verbatim, or a generic 500"""
    try:
        upstream = fetch_upstream()
    except requests.RequestException as e:
        logger.error("error occured: %s", e)
        return JSONResponse(status_code=500, content={"message": Config.PROXY_ERROR_MESSAGE})

    media_type = upstream.headers.get("Content-Type", "text/html")
    return Response(content=upstream.content, status_code=200, media_type=media_type)


if __name__ == "__main__":
    configure_logging()
    uvicorn.run(app, host=Config.PROXY_HOST, port=Config.PROXY_PORT)
