"""
Status workflow for job applications.

Two ways to move an application: guided one-click actions along the usual
hiring path (validated against GUIDED_TRANSITIONS), and an explicit status
change that accepts any known status plus an optional note. Deleting is
only allowed once an application is rejected.
"""
import logging
import uuid
from typing import NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerboard.errors import NotFoundError, SourceUnavailable, TransitionRejected
from careerboard.models.application import ApplicationActivity, CareerApplication
from careerboard.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

# Typical progression order; rejected/withdrawn can end any open application.
APPLICATION_STATUSES = (
    "submitted",
    "reviewing",
    "interview_scheduled",
    "interview_completed",
    "offered",
    "accepted",
    "rejected",
    "withdrawn",
)

STATUS_LABELS = {
    "submitted": "Submitted",
    "reviewing": "Under Review",
    "interview_scheduled": "Interview Scheduled",
    "interview_completed": "Interview Completed",
    "offered": "Offer Extended",
    "accepted": "Offer Accepted",
    "rejected": "Rejected",
    "withdrawn": "Withdrawn",
}

TERMINAL_STATUSES = {"accepted", "rejected", "withdrawn"}
DELETABLE_STATUSES = {"rejected"}

GUIDED_TRANSITIONS = {
    "submitted": ("reviewing", "rejected"),
    "reviewing": ("interview_scheduled", "rejected"),
    "interview_scheduled": ("rejected",),
    "interview_completed": ("offered", "rejected"),
    "offered": ("accepted", "rejected"),
}


class TransitionResult(NamedTuple):
    application: CareerApplication
    previous_status: str
    changed: bool


def guided_actions(status: str) -> list[str]:
    return list(GUIDED_TRANSITIONS.get(status, ()))


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def get_application(db: Session, application_id: str) -> CareerApplication:
    application = db.query(CareerApplication).filter(CareerApplication.id == application_id).first()
    if not application:
        raise NotFoundError("Application not found")
    return application


def append_note(existing: str | None, note: str, stamp: str) -> str:
    entry = f"[{stamp}] {note}"
    return f"{existing}\n{entry}" if existing else entry


def apply_transition(
    db: Session, application_id: str, new_status: str, note: str | None = None
) -> TransitionResult:
    """Move an application to any known status, optionally attaching a note.

    Re-applying the current status without a note changes nothing. A note on
    the current status is recorded without touching the status.
    """
    if new_status not in APPLICATION_STATUSES:
        raise TransitionRejected(f"Unknown application status: {new_status}")

    application = get_application(db, application_id)
    previous = application.status
    note = (note or "").strip() or None
    changed = previous != new_status
    if not changed and not note:
        return TransitionResult(application, previous, False)

    now = now_iso()
    try:
        application.status = new_status
        application.last_activity_at = now
        application.updated_at = now
        if note:
            application.notes = append_note(application.notes, note, now)
        db.add(ApplicationActivity(
            id=str(uuid.uuid4()),
            application_id=application.id,
            activity_type="status_change" if changed else "note",
            old_status=previous,
            new_status=new_status,
            description=(
                f"Status changed to {STATUS_LABELS[new_status]}" if changed else "Note added"
            ),
            notes=note,
            created_at=now,
        ))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Status update for application %s failed: %s", application_id, exc)
        raise SourceUnavailable("Failed to update application status") from exc

    db.refresh(application)
    if changed:
        logger.info("Application %s: %s -> %s", application_id, previous, new_status)
    return TransitionResult(application, previous, changed)


def apply_guided(db: Session, application_id: str, new_status: str) -> TransitionResult:
    """One-click action; only the next step on the usual path (or reject) is allowed."""
    application = get_application(db, application_id)
    allowed = guided_actions(application.status)
    if new_status not in allowed:
        raise TransitionRejected(
            f"Cannot move from {application.status} to {new_status} as a quick action"
        )
    return apply_transition(db, application_id, new_status)


def delete_application(db: Session, application_id: str) -> None:
    application = get_application(db, application_id)
    if application.status not in DELETABLE_STATUSES:
        raise TransitionRejected(
            f"Only rejected applications can be deleted (current status: {application.status})"
        )
    try:
        db.delete(application)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Deleting application %s failed: %s", application_id, exc)
        raise SourceUnavailable("Failed to delete application") from exc
    logger.info("Deleted rejected application %s", application_id)
