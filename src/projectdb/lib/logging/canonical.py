import logging
from typing import Optional

from starlette.requests import Request
from starlette.responses import Response

from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.logging.models import LogType

logger = logging.getLogger(__name__)


def log_request(request: Request, response: Response, end: int) -> None:
    save_to_logging_context({"log_type": LogType.api_request, "response_code": response.status_code})

    start: Optional[int] = logging_context().get("time_ns")
    if start:
        save_to_logging_context({"duration_ns": end - start})

    save_to_logging_context({"canonical": True})
    if response.status_code < 400:
        logger.info(msg="Request completed.", extra=logging_context())
    elif response.status_code < 500:
        logger.warning(msg="Request completed.", extra=logging_context())
    else:
        logger.error(msg="Request completed.", extra=logging_context())
