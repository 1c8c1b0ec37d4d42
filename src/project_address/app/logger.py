from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    stderr로 로그를 보냅니다. stdio transport에서는 stdout이 MCP 채널입니다.
    """
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
