"""
Organisation endpoints: create, list, read and add members.
"""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import directory
from ..auth import TokenClaims
from ..db import get_db
from ..dependencies import get_current_claims
from ..errors import BadRequestError, InternalError, NotFoundError
from ..policy import ensure_can_view_organisation
from ..schemas import (
    MemberAdd,
    MessageResponse,
    OrganisationCreate,
    OrganisationListResponse,
    OrganisationResponse,
)

router = APIRouter(prefix="/api/organisations", tags=["organisations"])
logger = logging.getLogger(__name__)


@router.post("", response_model=OrganisationResponse, status_code=status.HTTP_201_CREATED)
def create_organisation(
    payload: OrganisationCreate,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    try:
        org = directory.create_organisation(db, claims.subject_id, payload.name, payload.description)
    except SQLAlchemyError as e:
        logger.exception("Failed to create organisation for user_id=%s", claims.subject_id)
        raise BadRequestError("Client error") from e

    logger.info("Organisation created: org_id=%s created_by=%s", org.id, claims.subject_id)
    return OrganisationResponse(message="Organisation created successfully", data=org.to_dict())


@router.post("/{org_id}/users", response_model=MessageResponse)
def add_user_to_organisation(
    org_id: str,
    payload: MemberAdd,
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
):
    if not payload.user_id:
        raise BadRequestError("User ID is required")

    try:
        org = directory.get_organisation(db, org_id)
        user = directory.get_user(db, payload.user_id) if org else None
    except SQLAlchemyError as e:
        logger.exception("Lookup failed while adding user_id=%s to org_id=%s", payload.user_id, org_id)
        raise InternalError("Failed to add user to organisation") from e

    if not org:
        raise NotFoundError("Organisation not found")
    if not user:
        raise NotFoundError("User not found")

    try:
        added = directory.add_member(db, org, user)
    except SQLAlchemyError as e:
        logger.exception("Failed to add user_id=%s to org_id=%s", payload.user_id, org_id)
        raise InternalError("Failed to add user to organisation") from e

    if added:
        logger.info("Member added: org_id=%s user_id=%s by=%s", org_id, payload.user_id, claims.subject_id)
    return MessageResponse(message="User added to organisation successfully")


@router.get("", response_model=OrganisationListResponse)
def list_organisations(claims: TokenClaims = Depends(get_current_claims), db: Session = Depends(get_db)):
    try:
        orgs = directory.organisations_visible_to(db, claims.subject_id)
    except SQLAlchemyError as e:
        logger.exception("Failed to list organisations for user_id=%s", claims.subject_id)
        raise InternalError("Error occurred while fetching user's organisations") from e

    return OrganisationListResponse(
        message="User's organisations retrieved successfully",
        data={"organisations": [org.to_dict() for org in orgs]},
    )


@router.get("/{org_id}", response_model=OrganisationResponse)
def get_organisation(org_id: str, claims: TokenClaims = Depends(get_current_claims), db: Session = Depends(get_db)):
    # An unknown organisation is reported exactly like one the caller is not in
    try:
        org = directory.get_organisation(db, org_id)
        member_ids = directory.member_ids_of(db, org_id) if org else []
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch org_id=%s for user_id=%s", org_id, claims.subject_id)
        raise InternalError("Error occurred while fetching organisation") from e

    ensure_can_view_organisation(claims.subject_id, member_ids)

    return OrganisationResponse(message="Organisation retrieved successfully", data=org.to_dict())
