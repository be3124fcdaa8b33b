"""
FastAPI backend: REST API over the ordered contact index.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from contactbook.application import (
    ContactCreated,
    ContactDeleted,
    ContactService,
    ContactUpdated,
    DuplicateKey,
    NotFound,
    OrderedContactIndex,
    StorageUnavailable,
    ValidationFailed,
    benchmark_index,
)
from contactbook.domain import Contact, ContactFields
from contactbook.infrastructure import (
    Neo4jContactRepository,
    ensure_contact_constraint,
    load_contacts_file,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _log_level(name: str) -> int:
    """Map a level name to its number. Unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _configure_logging() -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_dir = os.environ.get("LOG_DIR", "").strip()
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(log_dir, "combined.log"),
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        )
        error_handler = RotatingFileHandler(
            os.path.join(log_dir, "error.log"),
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)
    logging.basicConfig(
        format=LOG_FORMAT,
        level=_log_level(os.environ.get("LOG_LEVEL", "INFO")),
        handlers=handlers,
    )


_configure_logging()
logger = logging.getLogger(__name__)

BACKEND_MEMORY = "memory"
BACKEND_NEO4J = "neo4j"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def get_service(app: FastAPI) -> ContactService:
    return app.state.service


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    backend = os.environ.get("CONTACTS_BACKEND", BACKEND_MEMORY).strip().lower()
    try:
        repository = None
        if backend == BACKEND_NEO4J:
            app.state.driver = _get_driver()
            ensure_contact_constraint(app.state.driver)
            repository = Neo4jContactRepository(app.state.driver)
        elif backend != BACKEND_MEMORY:
            raise ValueError(f"Unknown CONTACTS_BACKEND: {backend!r}")
        service = ContactService(OrderedContactIndex(), repository=repository)
        service.load()
        seed_file = os.environ.get("CONTACTS_SEED_FILE", "").strip()
        if seed_file:
            load_contacts_file(seed_file, service)
        app.state.service = service
        logger.info("Contact API ready (backend=%s, contacts=%d)", backend, len(service.list_contacts()))
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Contact Manager API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(content={"error": "Internal server error"}, status_code=500)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactBody(BaseModel):
    """Incoming contact JSON. Every field is optional here; the index reports what is missing."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    def to_fields(self) -> ContactFields:
        return ContactFields(**self.model_dump())


class ContactItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    first_name: str
    last_name: str
    phone: str
    email: str
    address: str | None = None


def _contact_json(contact: Contact) -> dict:
    return ContactItem.model_validate(contact).model_dump(by_alias=True)


def _error(status_code: int, message: str, report: dict[str, str] | None = None) -> JSONResponse:
    content: dict = {"error": message}
    if report:
        content["details"] = {to_camel(field): reason for field, reason in report.items()}
    return JSONResponse(content=content, status_code=status_code)


_FIELD_BY_ALIAS = {to_camel(name): name for name in ContactBody.model_fields}


@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    """Answer malformed request data in the same shape as an index validation report."""
    report: dict[str, str] = {}
    for err in exc.errors():
        names = [str(part) for part in err.get("loc", ())[1:] if isinstance(part, str)]
        field = _FIELD_BY_ALIAS.get(names[-1], names[-1]) if names else str(err.get("loc", ("body",))[0])
        report.setdefault(field, err.get("msg", "Invalid value"))
    logger.warning("%s %s - Malformed request: %s", request.method, request.url.path, report)
    return _error(400, "Validation failed", report)


def _storage_error(result: StorageUnavailable) -> JSONResponse:
    logger.error("Storage unavailable: %s", result.reason)
    return _error(503, "Storage unavailable")


@app.get("/contacts")
def list_contacts(request: Request):
    contacts = get_service(request.app).list_contacts()
    logger.info("GET /contacts - Retrieving all contacts (count=%d)", len(contacts))
    return [_contact_json(c) for c in contacts]


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: str, request: Request):
    result = get_service(request.app).get_contact(contact_id)
    if isinstance(result, NotFound):
        logger.warning("GET /contacts/%s - Contact not found", contact_id)
        return _error(404, "Contact not found")
    logger.info("GET /contacts/%s - Retrieved contact", contact_id)
    return _contact_json(result)


@app.post("/contacts")
def create_contact(body: ContactBody, request: Request):
    logger.info("POST /contacts - Adding new contact (id=%s)", body.id)
    result = get_service(request.app).add_contact(body.to_fields())
    if isinstance(result, DuplicateKey):
        logger.warning("POST /contacts - Duplicate id %s", result.contact_id)
        return _error(409, "Contact already exists", result.report)
    if isinstance(result, ValidationFailed):
        logger.warning("POST /contacts - Validation failed: %s", result.report)
        return _error(400, "Validation failed", result.report)
    if isinstance(result, StorageUnavailable):
        return _storage_error(result)
    if not isinstance(result, ContactCreated):
        return _error(400, "Invalid contact")
    logger.info("POST /contacts - Contact added (id=%s)", result.contact.id)
    return JSONResponse(content=_contact_json(result.contact), status_code=201)


@app.put("/contacts/{contact_id}")
def update_contact(contact_id: str, body: ContactBody, request: Request):
    logger.info("PUT /contacts/%s - Updating contact", contact_id)
    result = get_service(request.app).update_contact(contact_id, body.to_fields())
    if isinstance(result, NotFound):
        logger.warning("PUT /contacts/%s - Contact not found", contact_id)
        return _error(404, "Contact not found")
    if isinstance(result, ValidationFailed):
        logger.warning("PUT /contacts/%s - Validation failed: %s", contact_id, result.report)
        return _error(400, "Validation failed", result.report)
    if isinstance(result, StorageUnavailable):
        return _storage_error(result)
    if not isinstance(result, ContactUpdated):
        return _error(400, "Invalid contact")
    logger.info("PUT /contacts/%s - Contact updated", contact_id)
    return _contact_json(result.contact)


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: str, request: Request):
    logger.info("DELETE /contacts/%s - Deleting contact", contact_id)
    result = get_service(request.app).remove_contact(contact_id)
    if isinstance(result, NotFound):
        logger.warning("DELETE /contacts/%s - Contact not found", contact_id)
        return _error(404, "Contact not found")
    if isinstance(result, StorageUnavailable):
        return _storage_error(result)
    if not isinstance(result, ContactDeleted):
        return _error(400, "Invalid contact")
    logger.info("DELETE /contacts/%s - Contact deleted", contact_id)
    return {"message": "Contact deleted successfully"}


# --- REST: performance ---


@app.get("/performance")
def performance(size: int = 100):
    if size < 1 or size > 10_000:
        return _error(400, "size must be between 1 and 10000")
    timings = benchmark_index(size)
    return {
        "size": timings.size,
        "insertMs": timings.insert_ms,
        "lookupMs": timings.lookup_ms,
        "listMs": timings.list_ms,
    }
