"""Interest guard: idempotent applications and their status transitions."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_board.db.time import utcnow
from campus_board.models import Application, ApplicationStatus

from . import opportunities
from .errors import (
    DuplicateInterest,
    Forbidden,
    InvalidInput,
    InvalidTransition,
    NotFound,
    SelfApplication,
)

__all__ = [
    "express_interest",
    "list_applications_for_opportunity",
    "list_applications_for_user",
    "transition_application",
]

logger = logging.getLogger(__name__)

# Every legal move starts from pending; terminal states have no exits.
ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset(
        {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
    ),
    ApplicationStatus.ACCEPTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.WITHDRAWN: frozenset(),
}


def _find_pending(db: Session, user_id: str, opportunity_id: str) -> Application | None:
    stmt = select(Application).where(
        Application.user_id == user_id,
        Application.opportunity_id == opportunity_id,
        Application.status == ApplicationStatus.PENDING.value,
    )
    return db.scalars(stmt).first()


def express_interest(db: Session, user_id: str, opportunity_id: str) -> Application:
    """Record a pending application for ``user_id`` on ``opportunity_id``.

    The pending-row lookup only short-circuits the common case; the partial
    unique index on pending rows is what rejects a racing duplicate.

    Raises:
        NotFound: If the opportunity does not exist.
        SelfApplication: If the user owns the opportunity.
        DuplicateInterest: If a pending application already exists.
    """
    owner_id = opportunities.get_owner(db, opportunity_id)
    if owner_id == user_id:
        raise SelfApplication()

    if _find_pending(db, user_id, opportunity_id) is not None:
        raise DuplicateInterest()

    now = utcnow()
    application = Application(
        user_id=user_id,
        opportunity_id=opportunity_id,
        status=ApplicationStatus.PENDING.value,
        created_at=now,
        updated_at=now,
    )
    try:
        with db.begin_nested():
            db.add(application)
            db.flush()
    except IntegrityError as err:
        logger.info(
            "Concurrent interest from %s on opportunity %s rejected by constraint",
            user_id,
            opportunity_id,
        )
        raise DuplicateInterest() from err

    db.commit()
    db.refresh(application)
    logger.info("User %s expressed interest in opportunity %s", user_id, opportunity_id)
    return application


def _parse_status(value: str | ApplicationStatus) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError as err:
        raise InvalidInput(f"Unknown application status: {value!r}") from err


def _check_entitlement(
    db: Session,
    application: Application,
    target: ApplicationStatus,
    actor: str,
) -> None:
    if target is ApplicationStatus.WITHDRAWN:
        if actor != application.user_id:
            raise Forbidden("Only the applicant can withdraw an application")
    elif target in (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED):
        if actor != opportunities.get_owner(db, application.opportunity_id):
            raise Forbidden("Only the opportunity owner can accept or reject applications")


def transition_application(
    db: Session,
    application_id: int,
    new_status: str | ApplicationStatus,
    *,
    actor: str | None = None,
) -> Application:
    """Move a pending application to a terminal status.

    The update is conditional on the row still being pending, so of two
    racing transitions only one can win.

    Args:
        db: Request-scoped database session.
        application_id: Application to transition.
        new_status: Target status.
        actor: Caller id. When given, withdrawal is limited to the applicant and
            accept/reject to the opportunity owner.

    Raises:
        InvalidInput: If ``new_status`` is not a known status.
        NotFound: If the application does not exist.
        Forbidden: If ``actor`` may not perform this transition.
        InvalidTransition: If the move is not pending -> terminal.
    """
    target = _parse_status(new_status)
    application = db.get(Application, application_id)
    if application is None:
        raise NotFound("Application not found")

    if actor is not None:
        _check_entitlement(db, application, target, actor)

    current = ApplicationStatus(application.status)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidTransition(
            f"Cannot move application from {current.value} to {target.value}"
        )

    result = db.execute(
        update(Application)
        .where(
            Application.id == application.id,
            Application.status == ApplicationStatus.PENDING.value,
        )
        .values(status=target.value, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.refresh(application)
        raise InvalidTransition(
            f"Cannot move application from {application.status} to {target.value}"
        )

    db.commit()
    db.refresh(application)
    logger.info("Application %s moved to %s", application.id, target.value)
    return application


def list_applications_for_user(db: Session, user_id: str) -> Sequence[Application]:
    """Return every application the user has made, newest first."""
    stmt = (
        select(Application)
        .where(Application.user_id == user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    return db.scalars(stmt).all()


def list_applications_for_opportunity(
    db: Session,
    opportunity_id: str,
    *,
    owner: str,
) -> Sequence[Application]:
    """Return applications on an opportunity; only its owner may list them."""
    if opportunities.get_owner(db, opportunity_id) != owner:
        raise Forbidden("Only the opportunity owner can view its applications")
    stmt = (
        select(Application)
        .where(Application.opportunity_id == opportunity_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    return db.scalars(stmt).all()
