"""
FastAPI development server: the remote contacts contract, held in memory.
Run with uvicorn: uvicorn api.main:app --port 3000 --reload
"""

import logging
import os
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

from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from contactbook.application.errors import ServiceError
from contactbook.infrastructure.memory_api import InMemoryContactDirectory
from contactbook.infrastructure.wire import (
    AuthResponse,
    ContactBody,
    ContactModel,
    LoginBody,
    RegisterBody,
    UserModel,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

API_PREFIX = os.environ.get("CONTACTBOOK_API_PREFIX", "/api").strip() or "/api"


def create_app(directory: InMemoryContactDirectory | None = None) -> FastAPI:
    """Build the app around a directory (a fresh one by default)."""
    app = FastAPI(title="Contactbook dev API")
    app.state.directory = directory or InMemoryContactDirectory()

    @app.exception_handler(ServiceError)
    async def _service_error(request: Request, exc: ServiceError):
        return JSONResponse(content={"error": exc.message}, status_code=exc.status_code or 500)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        message = "Invalid request"
        if fields:
            message = f"Invalid request: {', '.join(fields)}"
        return JSONResponse(content={"error": message}, status_code=400)

    app.include_router(_router(), prefix=API_PREFIX)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


def _directory(request: Request) -> InMemoryContactDirectory:
    return request.app.state.directory


def _token(authorization: str | None = Header(None)) -> str | None:
    """Bearer token from the Authorization header, or None."""
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


def _auth_payload(credential) -> dict:
    return AuthResponse(
        token=credential.token, user=UserModel.from_entity(credential.user)
    ).model_dump()


def _contact_payload(contact) -> dict:
    return ContactModel.from_entity(contact).model_dump(by_alias=True)


def _router() -> APIRouter:
    router = APIRouter()

    # --- auth ---

    @router.post("/auth/register", status_code=201)
    def register(body: RegisterBody, directory=Depends(_directory)):
        credential = directory.register(body.name, body.email, body.password)
        logger.info("Registered user %s", credential.user.id)
        return _auth_payload(credential)

    @router.post("/auth/login")
    def login(body: LoginBody, directory=Depends(_directory)):
        credential = directory.login(body.email, body.password)
        return _auth_payload(credential)

    # --- contacts ---

    @router.get("/contacts")
    def list_contacts(token=Depends(_token), directory=Depends(_directory)):
        contacts = directory.list_contacts(token)
        return {"contacts": [_contact_payload(c) for c in contacts]}

    @router.get("/contacts/{contact_id}")
    def get_contact(contact_id: str, token=Depends(_token), directory=Depends(_directory)):
        return _contact_payload(directory.get_contact(token, contact_id))

    @router.post("/contacts", status_code=201)
    def create_contact(
        body: ContactBody, token=Depends(_token), directory=Depends(_directory)
    ):
        contact = directory.create_contact(token, body.to_fields())
        return _contact_payload(contact)

    @router.put("/contacts/{contact_id}")
    def update_contact(
        contact_id: str,
        body: ContactBody,
        token=Depends(_token),
        directory=Depends(_directory),
    ):
        contact = directory.update_contact(token, contact_id, body.to_fields())
        return _contact_payload(contact)

    @router.delete("/contacts/{contact_id}")
    def delete_contact(contact_id: str, token=Depends(_token), directory=Depends(_directory)):
        directory.delete_contact(token, contact_id)
        return {"message": "Contact deleted successfully"}

    return router


app = create_app()
