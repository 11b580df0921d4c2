from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import directory
from .auth import TokenService, dummy_verify, hash_password, verify_password
from .config import settings
from .db import get_db, init_db
from .dependencies import get_token_service
from .errors import AuthenticationError, InternalError, ConflictError, register_error_handlers
from .routes import health, organisations, users
from .schemas import AuthResponse, UserCreate, UserLogin
from .utils.log_setup import configure_logging

configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database and signing key on startup"""
    init_db()
    get_token_service()
    yield


app = FastAPI(
    title=settings.SERVICE_NAME,
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(organisations.router)
app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
def root():
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "status": "running",
    }


@app.post("/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        # Fast path; the unique index on email is what actually guards concurrent registrations
        existing = directory.get_user_by_email(db, user.email)
    except SQLAlchemyError as e:
        logger.exception("Email lookup failed during registration")
        raise InternalError("Registration failed") from e
    if existing:
        raise ConflictError("User already exists")

    try:
        hashed_pw = hash_password(user.password)
    except (ValueError, TypeError) as e:
        logger.exception("Password hashing failed during registration")
        raise InternalError("Registration failed") from e

    try:
        new_user = directory.create_account_with_default_organisation(
            db,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password_hash=hashed_pw,
            phone=user.phone,
        )
        org_ids = directory.organisation_ids_for(db, new_user.id)
    except SQLAlchemyError as e:
        logger.exception("Registration failed for a new account")
        raise InternalError("Registration failed") from e

    logger.info("Registered user_id=%s default_orgs=%s", new_user.id, org_ids)

    return AuthResponse(
        message="Registration successful",
        data={
            "accessToken": tokens.issue(new_user.id, org_ids),
            "user": new_user.to_dict(),
        },
    )


@app.post("/auth/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        user = directory.get_user_by_email(db, credentials.email)
    except SQLAlchemyError as e:
        logger.exception("Account lookup failed during login")
        raise InternalError("Login failed") from e

    if not user:
        dummy_verify()
        logger.info("Login failed: no account for the supplied email")
        raise AuthenticationError("Authentication failed")
    if not verify_password(credentials.password, user.password):
        logger.info("Login failed: bad password for user_id=%s", user.id)
        raise AuthenticationError("Authentication failed")

    try:
        org_ids = directory.organisation_ids_for(db, user.id)
    except SQLAlchemyError as e:
        logger.exception("Membership lookup failed during login for user_id=%s", user.id)
        raise InternalError("Login failed") from e

    logger.info("Successful login: user_id=%s", user.id)

    return AuthResponse(
        message="Login successful",
        data={
            "accessToken": tokens.issue(user.id, org_ids),
            "user": user.to_dict(),
        },
    )
