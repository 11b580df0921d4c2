"""
Account directory: user and organisation records in the relational store.

Each function takes the request's Session. Writes commit on success and roll
back before re-raising on failure, so callers only map the exception.
"""
import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import ConflictError
from .models import Organisation, User, user_organisations

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_organisation(db: Session, org_id: str) -> Optional[Organisation]:
    return db.get(Organisation, org_id)


def create_account_with_default_organisation(
    db: Session,
    first_name: str,
    last_name: str,
    email: str,
    password_hash: str,
    phone: Optional[str] = None,
) -> User:
    """
    Create a user plus the default organisation it creates and belongs to.

    Raises:
        ConflictError: the email is already taken (including a concurrent
            registration that won the race to the unique index)
        SQLAlchemyError: any other store failure
    """
    user = User(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password_hash,
        phone=phone,
    )
    org = Organisation(
        name=f"{first_name}'s Organisation",
        description=f"Default organisation for {first_name}",
        creator=user,
    )
    org.members.append(user)
    db.add_all([user, org])
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Registration rejected, email already in use")
        raise ConflictError("User already exists") from exc
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(user)
    return user


def create_organisation(db: Session, creator_id: str, name: str, description: str = "") -> Organisation:
    # The creator is not added as a member
    org = Organisation(name=name, description=description or "", created_by=creator_id)
    db.add(org)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(org)
    return org


def add_member(db: Session, org: Organisation, user: User) -> bool:
    """Connect ``user`` to ``org``. Returns False if already a member."""
    if user in org.members:
        return False
    org.members.append(user)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return True


def organisation_ids_for(db: Session, user_id: str) -> List[str]:
    """Ids of the organisations the user is a member of."""
    rows = (
        db.query(user_organisations.c.org_id)
        .filter(user_organisations.c.user_id == user_id)
        .all()
    )
    return [row[0] for row in rows]


def member_ids_of(db: Session, org_id: str) -> List[str]:
    rows = (
        db.query(user_organisations.c.user_id)
        .filter(user_organisations.c.org_id == org_id)
        .all()
    )
    return [row[0] for row in rows]


def organisations_created_by(db: Session, user_id: str) -> List[str]:
    rows = db.query(Organisation.id).filter(Organisation.created_by == user_id).all()
    return [row[0] for row in rows]


def organisations_visible_to(db: Session, user_id: str) -> List[Organisation]:
    """Organisations the user belongs to or created."""
    return (
        db.query(Organisation)
        .filter(
            or_(
                Organisation.members.any(User.id == user_id),
                Organisation.created_by == user_id,
            )
        )
        .order_by(Organisation.created_at.asc())
        .all()
    )
