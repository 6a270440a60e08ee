import logging
import time

import uvicorn
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from sqlalchemy.orm import configure_mappers
from starlette import status
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette_context.plugins import (
    CorrelationIdPlugin,
    RequestIdPlugin,
    UserAgentPlugin,
)

from projectdb import __version__
from projectdb.lib.exceptions import (
    CrossTaskAssignmentError,
    EmployeeInUseError,
    UpdateAlreadyAssignedError,
)
from projectdb.lib.logging.canonical import log_request
from projectdb.lib.logging.context import (
    PopulatedRawContextMiddleware,
    format_raised_exception_info_as_dict,
    logging_context,
    save_to_logging_context,
)
from projectdb.lib.permissions import PermissionException
from projectdb.models import *  # noqa: F403
from projectdb.routers import (
    artifacts,
    auth,
    comments,
    employees,
    managers,
    permissions,
    projects,
    tasks,
    updates,
)

logger = logging.getLogger(__name__)

# Scan all our model classes and create backref attributes. Otherwise, these attributes only get added to classes once
# an instance of the related class has been created.
configure_mappers()

app = FastAPI()
app.add_middleware(
    PopulatedRawContextMiddleware,
    plugins=(
        CorrelationIdPlugin(force_new_uuid=True),
        RequestIdPlugin(force_new_uuid=True),
        UserAgentPlugin(),
    ),
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(artifacts.router)
app.include_router(auth.router)
app.include_router(comments.router)
app.include_router(employees.router)
app.include_router(managers.router)
app.include_router(permissions.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(updates.router)


@app.exception_handler(PermissionException)
async def permission_exception_handler(request: Request, exc: PermissionException):
    response = JSONResponse({"detail": exc.message}, status_code=exc.http_code)
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    response = JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder({"detail": list(map(lambda error: customize_validation_error(error), exc.errors()))}),
    )
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(CrossTaskAssignmentError)
async def cross_task_assignment_exception_handler(request: Request, exc: CrossTaskAssignmentError):
    response = JSONResponse(status_code=400, content={"detail": str(exc)})
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(UpdateAlreadyAssignedError)
async def update_already_assigned_exception_handler(request: Request, exc: UpdateAlreadyAssignedError):
    response = JSONResponse(status_code=409, content={"detail": str(exc)})
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


@app.exception_handler(EmployeeInUseError)
async def employee_in_use_exception_handler(request: Request, exc: EmployeeInUseError):
    response = JSONResponse(status_code=409, content={"detail": str(exc)})
    save_to_logging_context(format_raised_exception_info_as_dict(exc))
    log_request(request, response, time.time_ns())
    return response


def customize_validation_error(error):
    # surface custom validation loc context
    if error.get("ctx", {}).get("custom_loc"):
        error = {
            "loc": error["ctx"]["custom_loc"],
            "msg": error["msg"],
            "type": error["type"],
        }

    if error["type"] == "type_error.none.not_allowed":
        return {"loc": error["loc"], "msg": "Required", "type": error["type"]}
    return error


@app.exception_handler(Exception)
async def exception_handler(request, err):
    save_to_logging_context(format_raised_exception_info_as_dict(err))
    response = JSONResponse(status_code=500, content={"message": "Internal server error"})

    try:
        logger.error(msg="Uncaught exception.", extra=logging_context(), exc_info=err)
    finally:
        log_request(request, response, time.time_ns())

    return response


def customize_openapi_schema():
    title = "ProjectDB API"
    version = __version__
    openapi_schema = get_openapi(title=title, version=version, routes=app.routes)
    openapi_schema["info"] = {
        "title": title,
        "version": version,
        "description": """ProjectDB tracks the projects of a team: managers break their projects down into tasks, staff
report progress on the tasks assigned to them, and managers link those reports to the artifacts each task delivers.""",
    }
    openapi_schema["tags"] = [
        router_module.metadata
        for router_module in (auth, employees, managers, projects, tasks, updates, comments, artifacts, permissions)
    ]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


customize_openapi_schema()


# If the application is not already being run within a uvicorn server, start uvicorn here.
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
