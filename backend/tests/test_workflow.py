import uuid

import pytest
from sqlalchemy.exc import OperationalError

from careerboard.errors import NotFoundError, SourceUnavailable, TransitionRejected
from careerboard.models.application import ApplicationActivity, CareerApplication
from careerboard.models.position import CareerPosition
from careerboard.services.workflow import (
    APPLICATION_STATUSES,
    GUIDED_TRANSITIONS,
    append_note,
    apply_guided,
    apply_transition,
    delete_application,
    guided_actions,
    is_terminal,
)

OLD = "2020-01-01T00:00:00Z"


def _seed_application(db, status="submitted", notes=None):
    position = CareerPosition(
        id=str(uuid.uuid4()), title="Platform Engineer", slug=f"platform-{uuid.uuid4().hex[:8]}",
        description="", status="open", created_at=OLD, updated_at=OLD,
    )
    app = CareerApplication(
        id=str(uuid.uuid4()), position_id=position.id,
        first_name="Grace", last_name="Hopper", email="grace@example.com",
        status=status, notes=notes,
        applied_at=OLD, last_activity_at=OLD, created_at=OLD, updated_at=OLD,
    )
    db.add_all([position, app])
    db.commit()
    return app.id


def _activities(db, application_id):
    return db.query(ApplicationActivity).filter(ApplicationActivity.application_id == application_id).all()


class TestGuidedActions:
    def test_happy_path_to_reviewing(self, db):
        app_id = _seed_application(db)
        result = apply_guided(db, app_id, "reviewing")
        assert result.changed is True
        assert result.previous_status == "submitted"
        assert result.application.status == "reviewing"
        assert result.application.last_activity_at > OLD
        assert result.application.notes is None

    def test_skipping_ahead_is_rejected(self, db):
        app_id = _seed_application(db)
        with pytest.raises(TransitionRejected):
            apply_guided(db, app_id, "offered")
        assert db.get(CareerApplication, app_id).status == "submitted"

    def test_repeating_an_action_is_rejected_the_second_time(self, db):
        app_id = _seed_application(db)
        apply_guided(db, app_id, "reviewing")
        with pytest.raises(TransitionRejected):
            apply_guided(db, app_id, "reviewing")
        assert db.get(CareerApplication, app_id).status == "reviewing"

    @pytest.mark.parametrize("status", ["accepted", "rejected", "withdrawn"])
    def test_terminal_statuses_offer_nothing(self, db, status):
        app_id = _seed_application(db, status=status)
        assert is_terminal(status)
        assert guided_actions(status) == []
        with pytest.raises(TransitionRejected):
            apply_guided(db, app_id, "rejected")

    def test_every_open_status_can_be_rejected(self):
        for status, targets in GUIDED_TRANSITIONS.items():
            assert "rejected" in targets, status

    def test_interview_scheduled_has_no_forward_step(self):
        assert guided_actions("interview_scheduled") == ["rejected"]


class TestExplicitTransition:
    def test_any_known_status_is_accepted(self, db):
        app_id = _seed_application(db, status="accepted")
        result = apply_transition(db, app_id, "interview_completed")
        assert result.application.status == "interview_completed"
        assert result.previous_status == "accepted"

    def test_unknown_status_is_rejected(self, db):
        app_id = _seed_application(db)
        with pytest.raises(TransitionRejected):
            apply_transition(db, app_id, "hired")
        assert _activities(db, app_id) == []

    def test_note_is_appended_with_timestamp(self, db):
        app_id = _seed_application(db, status="interview_scheduled", notes="Phone screen went well")
        result = apply_transition(db, app_id, "interview_completed", "Panel was positive")
        lines = result.application.notes.splitlines()
        assert lines[0] == "Phone screen went well"
        assert lines[1].startswith("[")
        assert lines[1].endswith("] Panel was positive")

    def test_same_status_without_note_is_a_noop(self, db):
        app_id = _seed_application(db, status="reviewing")
        result = apply_transition(db, app_id, "reviewing")
        assert result.changed is False
        assert result.application.last_activity_at == OLD
        assert _activities(db, app_id) == []

    def test_same_status_with_note_records_note_only(self, db):
        app_id = _seed_application(db, status="reviewing")
        result = apply_transition(db, app_id, "reviewing", "Waiting on references")
        assert result.changed is False
        assert result.application.status == "reviewing"
        assert "Waiting on references" in result.application.notes
        [activity] = _activities(db, app_id)
        assert activity.activity_type == "note"

    def test_status_change_is_logged_as_activity(self, db):
        app_id = _seed_application(db)
        apply_transition(db, app_id, "offered", "Verbal offer made")
        [activity] = _activities(db, app_id)
        assert activity.activity_type == "status_change"
        assert activity.old_status == "submitted"
        assert activity.new_status == "offered"
        assert activity.notes == "Verbal offer made"

    def test_missing_application(self, db):
        with pytest.raises(NotFoundError):
            apply_transition(db, "nope", "reviewing")

    def test_store_failure_leaves_record_unchanged(self, db, monkeypatch):
        app_id = _seed_application(db)

        def broken_commit():
            raise OperationalError("UPDATE", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db, "commit", broken_commit)
        with pytest.raises(SourceUnavailable):
            apply_transition(db, app_id, "reviewing")
        monkeypatch.undo()
        assert db.get(CareerApplication, app_id).status == "submitted"

    def test_append_note_on_empty_notes(self):
        assert append_note(None, "hello", "2026-01-01T00:00:00Z") == "[2026-01-01T00:00:00Z] hello"


class TestDeleteGuard:
    @pytest.mark.parametrize("status", [s for s in APPLICATION_STATUSES if s != "rejected"])
    def test_only_rejected_applications_can_be_deleted(self, db, status):
        app_id = _seed_application(db, status=status)
        with pytest.raises(TransitionRejected):
            delete_application(db, app_id)
        assert db.get(CareerApplication, app_id) is not None

    def test_rejected_application_is_deleted_with_its_activity(self, db):
        app_id = _seed_application(db)
        apply_guided(db, app_id, "rejected")
        delete_application(db, app_id)
        db.expire_all()
        assert db.get(CareerApplication, app_id) is None
        assert _activities(db, app_id) == []

    def test_deleting_missing_application(self, db):
        with pytest.raises(NotFoundError):
            delete_application(db, "nope")
