import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pythonjsonlogger import jsonlogger

from .config import get_prefix, settings
from .notifications.errors import InvalidArgument, NotificationError
from .notifications.router import router as notifications_router
from .notifications.triggers import registry


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        log_record['service'] = settings.service_name
        log_record['environment'] = settings.environment
        log_record['timestamp'] = time.strftime(
            '%Y-%m-%dT%H:%M:%SZ', time.gmtime(record.created)
        )


def setup_logging():
    """Configure structured JSON logging for the application."""
    log_level = getattr(logging, settings.log_level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(CustomJsonFormatter('%(timestamp)s %(levelname)s %(service)s %(environment)s %(name)s %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('google').setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = '/api/v1'
PREFIX = get_prefix(API_VERSION)

app = FastAPI(root_path=PREFIX, title="Post Notifications API", version="1.0.0")

app.include_router(notifications_router)


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    logger.warning(f"Rejected {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=400,
        content={'error': {'status': 'INVALID_ARGUMENT', 'message': str(exc)}}
    )


def _internal_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={'error': {'status': 'INTERNAL', 'message': message}}
    )


@app.exception_handler(NotificationError)
async def notification_error_handler(request: Request, exc: NotificationError):
    return _internal_error(str(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=True)
    # Internal details stay in the log
    return _internal_error("Internal error")


@app.get("/health", tags=["Health"])
async def health():
    return {'status': 'healthy'}


@app.on_event("startup")
async def startup_event():
    setup_logging()
    logger.info(f"Start HTTP server with prefix: {PREFIX}")
    for event_type, path in registry.registered_paths:
        logger.info(f"Registered trigger: {event_type} {path}")
