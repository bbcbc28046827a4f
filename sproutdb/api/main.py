"""
HTTP transport - maps REST-ish endpoints onto the table API of one Database.
"""

import re
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.config import VERSION, debug_enabled, get_cors_origins, get_default_tables
from ..core.database import Database
from ..core.errors import QueryError, TableExistsError, TableNotFoundError, ValidationError
from ..util.logging import logger
from .metrics import ServerMetrics
from .schemas import (
    CreateTableRequest,
    CreateTableResponse,
    DeleteRequest,
    ErrorResponse,
    FindRequest,
    HealthResponse,
    LoadRequest,
    MetricsResponse,
    SuccessResponse,
    UpdateRequest,
    ValidationErrorResponse,
    ValidationFieldError,
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def default_database() -> Database:
    """A fresh database holding the configured default tables."""
    db = Database()
    for name in get_default_tables():
        db.create_table(name)
    return db


def create_app(db: Optional[Database] = None) -> FastAPI:
    """Build the FastAPI application serving db."""
    app = FastAPI(
        title="SproutDB",
        version=VERSION,
        description="In-memory test database with a small document query language",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None
    )
    app.state.db = db if db is not None else default_database()
    app.state.metrics = ServerMetrics()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        metrics: ServerMetrics = request.app.state.metrics
        start = time.perf_counter()
        metrics.record_request(request.method, request.url.path)
        client = request.client.host if request.client else None

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Unhandled error on {request.method} {request.url.path}: {e}")
            response = error_response(500, str(e))

        duration_ms = (time.perf_counter() - start) * 1000
        metrics.record_response(response.status_code, duration_ms)
        logger.log_request(request.method, request.url.path, response.status_code, duration_ms, client)
        return response

    _register_error_handlers(app)
    _register_routes(app)
    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(TableNotFoundError)
    async def table_not_found_handler(request: Request, exc: TableNotFoundError):
        return error_response(404, "Table not found")

    @app.exception_handler(TableExistsError)
    async def table_exists_handler(request: Request, exc: TableExistsError):
        return error_response(409, "Table already exists")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        body = ValidationErrorResponse(
            message=exc.message,
            errors=[
                ValidationFieldError(field=".".join(str(part) for part in issue.path), message=issue.message)
                for issue in exc.issues
            ]
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError):
        return error_response(400, str(exc))

    @app.exception_handler(re.error)
    async def regex_error_handler(request: Request, exc: re.error):
        return error_response(400, f"Invalid regular expression: {exc}")


def _register_routes(app: FastAPI) -> None:
    def get_db(request: Request) -> Database:
        return request.app.state.db

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(request: Request):
        """Check server health."""
        db = get_db(request)
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(),
            uptime=request.app.state.metrics.uptime(),
            version=VERSION,
            database={"tables": len(db), "totalRecords": db.total_records()}
        )

    @app.get("/metrics", response_model=MetricsResponse)
    def metrics_endpoint(request: Request):
        """Request metrics and per-table record counts."""
        db = get_db(request)
        data = request.app.state.metrics.snapshot()
        counts = db.record_counts()
        data["database"] = {
            "tables": list(counts),
            "tableCount": len(counts),
            "recordCounts": counts,
        }
        return MetricsResponse(**data)

    @app.post("/tables/{table}/insert", response_model=SuccessResponse)
    def insert_endpoint(table: str, request: Request, record: Dict[str, Any] = Body(...)):
        get_db(request).get_table(table).insert(record)
        return SuccessResponse()

    @app.post("/tables/{table}/find", response_model=List[Dict[str, Any]])
    def find_endpoint(table: str, request: Request, query: Optional[FindRequest] = None):
        target = get_db(request).get_table(table)
        options = query.model_dump(exclude_none=True) if query else None
        return target.find(options)

    @app.get("/tables/{table}/all", response_model=List[Dict[str, Any]])
    def all_endpoint(table: str, request: Request):
        return get_db(request).get_table(table).all()

    @app.delete("/tables/{table}/delete", response_model=SuccessResponse)
    def delete_endpoint(table: str, request: Request, query: Optional[DeleteRequest] = None):
        target = get_db(request).get_table(table)
        target.delete(query.where if query else None)
        return SuccessResponse()

    @app.put("/tables/{table}/update", response_model=SuccessResponse)
    def update_endpoint(table: str, body: UpdateRequest, request: Request):
        get_db(request).get_table(table).update(body.where, body.update)
        return SuccessResponse()

    @app.post("/tables/{table}/load", response_model=SuccessResponse)
    def load_endpoint(table: str, body: LoadRequest, request: Request):
        get_db(request).get_table(table).load(body.records)
        return SuccessResponse()

    @app.post("/tables", response_model=CreateTableResponse, status_code=201)
    def create_table_endpoint(body: CreateTableRequest, request: Request):
        """Create a new empty table."""
        name = (body.name or "").strip()
        if not name:
            return error_response(400, "Table name is required")
        get_db(request).create_table(name)
        return CreateTableResponse(message=f"Table '{name}' created")

    @app.get("/tables", response_model=List[str])
    def list_tables_endpoint(request: Request):
        return get_db(request).names()
