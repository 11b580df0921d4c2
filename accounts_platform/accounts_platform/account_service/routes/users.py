import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import directory
from ..auth import TokenClaims
from ..db import get_db
from ..dependencies import get_current_claims
from ..errors import InternalError, NotFoundError
from ..policy import ensure_can_view_user
from ..schemas import UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("/{user_id}", response_model=UserResponse)
def get_user_profile(user_id: str, claims: TokenClaims = Depends(get_current_claims), db: Session = Depends(get_db)):
    try:
        user = directory.get_user(db, user_id)
        if user:
            target_org_ids = directory.organisation_ids_for(db, user.id)
            created_org_ids = directory.organisations_created_by(db, claims.subject_id)
    except SQLAlchemyError as e:
        logger.exception("Profile lookup failed: user_id=%s requester=%s", user_id, claims.subject_id)
        raise InternalError() from e

    if not user:
        raise NotFoundError("User not found")

    ensure_can_view_user(
        requester_id=claims.subject_id,
        requester_org_ids=claims.organisation_ids,
        target_user_id=user.id,
        target_org_ids=target_org_ids,
        orgs_created_by_requester=created_org_ids,
    )

    return UserResponse(message="User retrieved successfully", data=user.to_dict())
