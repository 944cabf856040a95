"""
Notification dispatcher tests: fan-out of new_issue records to the roster's
device tokens and the single terminating write on the record.
"""

from uuid import uuid4

import pytest

from app.db_selectors.notifications import get_notification_by_id
from app.models import AdminRole, IssueCategory
from app.schemas.issues.issue_schemas import IssueCreate, IssueLocation
from app.schemas.notifications.notification_schemas import DispatchStatus
from app.services.issues.issue_services import submit_issue
from app.services.notifications import dispatch_services
from app.services.notifications.dispatch_services import dispatch_issue_notification
from app.tasks.issue_tasks import handle_notification_created

from conftest import FakePushService, create_admin

pytestmark = pytest.mark.asyncio


async def create_notification(db, district_id="madurai", panchayat_union_id="melur", title="Broken streetlight"):
    _, notification = await submit_issue(
        db,
        IssueCreate(
            title=title,
            description="The streetlight near the bus stand has been out for a week",
            category=IssueCategory.STREETLIGHT,
            location=IssueLocation(district_id=district_id, panchayat_union_id=panchayat_union_id),
            submitter_phone="+919812345678",
        ),
    )
    return notification


async def reload(session_factory, notification_id):
    async with session_factory() as session:
        return await get_notification_by_id(session, notification_id)


@pytest.fixture
def terminating_writes(monkeypatch):
    """Records every call to mark_notification_processed while still performing it."""
    calls = []
    original = dispatch_services.mark_notification_processed

    async def spy(db, notification_id, **outcome):
        calls.append(outcome)
        await original(db, notification_id, **outcome)

    monkeypatch.setattr(dispatch_services, "mark_notification_processed", spy)
    return calls


# ═══════════════════════════════════════════════════════════════════════════════
# DELIVERY
# ═══════════════════════════════════════════════════════════════════════════════

class TestDispatchDelivery:
    async def test_exact_panchayat_leader_receives_push(self, db, session_factory, push_service):
        await create_admin(db, "+919876500011", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", fcm_token="tok1")
        notification = await create_notification(db)

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.SENT
        assert [message.tokens for message in push_service.messages] == [["tok1"]]

        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.processed_at is not None
        assert stored.recipient_count == 1
        assert stored.success_count == 1
        assert stored.failure_count == 0
        assert stored.error is None

    async def test_message_carries_issue_id_and_type(self, db, push_service):
        await create_admin(db, "+919876500012", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db, title="Overflowing drain")

        await dispatch_issue_notification(db, notification, push_service)

        message = push_service.messages[0]
        assert message.title == "New Issue Reported"
        assert message.body == "Overflowing drain"
        assert message.data == {"issueId": str(notification.issue_id), "type": "new_issue"}
        assert message.link == f"/admin/issues?highlight={notification.issue_id}"

    async def test_district_leader_and_super_admin_both_receive(self, db, session_factory, push_service):
        await create_admin(db, "+919876500013", AdminRole.DISTRICT_LEADER, "coimbatore", fcm_token="t1")
        await create_admin(db, "+919876500014", AdminRole.SUPER_ADMIN, fcm_token="t2")
        notification = await create_notification(db, "coimbatore", "pollachi")

        await dispatch_issue_notification(db, notification, push_service)

        assert set(push_service.messages[0].tokens) == {"t1", "t2"}
        stored = await reload(session_factory, notification.id)
        assert stored.recipient_count == 2
        assert stored.matched_count == 2

    async def test_inactive_and_unrelated_admins_are_not_sent_to(self, db, push_service):
        await create_admin(db, "+919876500015", AdminRole.DISTRICT_LEADER, "madurai", fcm_token="active")
        await create_admin(
            db, "+919876500016", AdminRole.DISTRICT_LEADER, "madurai", fcm_token="inactive", is_active=False
        )
        await create_admin(db, "+919876500017", AdminRole.DISTRICT_LEADER, "theni", fcm_token="other")
        await create_admin(db, "+919876500018", AdminRole.BOOTH_AGENT, "madurai", "melur", fcm_token="booth")
        notification = await create_notification(db)

        await dispatch_issue_notification(db, notification, push_service)

        assert push_service.messages[0].tokens == ["active"]

    async def test_partial_failure_is_counted(self, db, session_factory, terminating_writes):
        push_service = FakePushService(failing_tokens={"expired"})
        await create_admin(db, "+919876500019", AdminRole.DISTRICT_LEADER, "madurai", fcm_token="expired")
        await create_admin(db, "+919876500020", AdminRole.SUPER_ADMIN, fcm_token="fresh")
        notification = await create_notification(db)

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.SENT
        assert (outcome.success_count, outcome.failure_count) == (1, 1)
        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.recipient_count == 2
        assert stored.success_count == 1
        assert stored.failure_count == 1
        assert len(terminating_writes) == 1

    async def test_all_tokens_failing_still_marks_processed(self, db, session_factory):
        push_service = FakePushService(failing_tokens={"a", "b"})
        await create_admin(db, "+919876500021", AdminRole.DISTRICT_LEADER, "madurai", fcm_token="a")
        await create_admin(db, "+919876500022", AdminRole.STATE_ADMIN, fcm_token="b")
        notification = await create_notification(db)

        await dispatch_issue_notification(db, notification, push_service)

        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.success_count == 0
        assert stored.failure_count == 2


# ═══════════════════════════════════════════════════════════════════════════════
# NO RECIPIENTS
# ═══════════════════════════════════════════════════════════════════════════════

class TestDispatchWithoutRecipients:
    async def test_sub_district_mismatch_sends_nothing(self, db, session_factory, push_service):
        await create_admin(db, "+919876500031", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", fcm_token="tok1")
        notification = await create_notification(db, "madurai", "usilampatti")

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.NO_RECIPIENTS
        assert push_service.messages == []
        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.recipient_count == 0
        assert stored.success_count is None

    async def test_matched_admins_without_tokens(self, db, session_factory, push_service):
        await create_admin(db, "+919876500032", AdminRole.DISTRICT_LEADER, "madurai")
        notification = await create_notification(db)

        await dispatch_issue_notification(db, notification, push_service)

        assert push_service.messages == []
        stored = await reload(session_factory, notification.id)
        assert stored.matched_count == 1
        assert stored.recipient_count == 0

    async def test_empty_roster(self, db, session_factory, push_service):
        notification = await create_notification(db)

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.NO_RECIPIENTS
        assert (await reload(session_factory, notification.id)).processed is True

    async def test_empty_district_reaches_nobody(self, db, session_factory, push_service):
        await create_admin(db, "+919876500033", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db, "", "")

        await dispatch_issue_notification(db, notification, push_service)

        assert push_service.messages == []
        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.recipient_count == 0


# ═══════════════════════════════════════════════════════════════════════════════
# FAILURES AND THE TERMINATING WRITE
# ═══════════════════════════════════════════════════════════════════════════════

class TestDispatchFailures:
    async def test_roster_read_failure_is_recorded(self, db, session_factory, push_service, monkeypatch):
        notification = await create_notification(db)

        async def broken_roster(_db):
            raise RuntimeError("roster unavailable")

        monkeypatch.setattr(dispatch_services, "list_admin_snapshots", broken_roster)

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.FAILED
        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.error == "roster unavailable"
        assert stored.recipient_count is None

    async def test_send_failure_is_recorded(self, db, session_factory):
        push_service = FakePushService(error=ConnectionError("FCM unavailable"))
        await create_admin(db, "+919876500041", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db)

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.FAILED
        stored = await reload(session_factory, notification.id)
        assert stored.processed is True
        assert stored.error == "FCM unavailable"

    @pytest.mark.parametrize(
        "tokens, failing, roster_broken",
        [
            ([], set(), False),
            (["a"], set(), False),
            (["a", "b"], {"a", "b"}, False),
            (["a"], set(), True),
        ],
        ids=["no-recipients", "sent", "all-failed", "roster-error"],
    )
    async def test_exactly_one_terminating_write(
        self, db, monkeypatch, terminating_writes, tokens, failing, roster_broken
    ):
        for index, token in enumerate(tokens):
            await create_admin(db, f"+91987650005{index}", AdminRole.SUPER_ADMIN, fcm_token=token)
        notification = await create_notification(db)

        if roster_broken:

            async def broken_roster(_db):
                raise RuntimeError("roster unavailable")

            monkeypatch.setattr(dispatch_services, "list_admin_snapshots", broken_roster)

        await dispatch_issue_notification(db, notification, FakePushService(failing_tokens=failing))

        assert len(terminating_writes) == 1

    async def test_final_write_failure_propagates(self, db, push_service, monkeypatch):
        notification = await create_notification(db)

        async def failing_write(*args, **kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr(dispatch_services, "mark_notification_processed", failing_write)

        with pytest.raises(RuntimeError, match="database went away"):
            await dispatch_issue_notification(db, notification, push_service)


# ═══════════════════════════════════════════════════════════════════════════════
# GUARDS
# ═══════════════════════════════════════════════════════════════════════════════

class TestDispatchGuards:
    async def test_other_notification_types_are_ignored(self, db, session_factory, push_service, terminating_writes):
        await create_admin(db, "+919876500061", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db)
        notification.type = "issue_resolved"
        await db.commit()

        outcome = await dispatch_issue_notification(db, notification, push_service)

        assert outcome.status == DispatchStatus.SKIPPED
        assert push_service.messages == []
        assert terminating_writes == []
        assert (await reload(session_factory, notification.id)).processed is False

    async def test_redelivered_record_is_not_sent_twice(self, db, session_factory, push_service):
        await create_admin(db, "+919876500062", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db)
        await dispatch_issue_notification(db, notification, push_service)

        async with session_factory() as session:
            redelivered = await get_notification_by_id(session, notification.id)
            outcome = await dispatch_issue_notification(session, redelivered, push_service)

        assert outcome.status == DispatchStatus.ALREADY_PROCESSED
        assert len(push_service.messages) == 1


# ═══════════════════════════════════════════════════════════════════════════════
# TASK HANDLER
# ═══════════════════════════════════════════════════════════════════════════════

class TestNotificationCreatedHandler:
    async def test_handler_dispatches_by_id(self, db, session_factory, push_service, monkeypatch):
        monkeypatch.setattr("app.tasks.issue_tasks.get_push_service", lambda: push_service)
        await create_admin(db, "+919876500071", AdminRole.SUPER_ADMIN, fcm_token="tok1")
        notification = await create_notification(db)

        async with session_factory() as session:
            result = await handle_notification_created(session, notification.id)

        assert result["status"] == "sent"
        assert result["recipient_count"] == 1
        assert len(push_service.messages) == 1

    async def test_handler_ignores_missing_record(self, db, push_service, monkeypatch):
        monkeypatch.setattr("app.tasks.issue_tasks.get_push_service", lambda: push_service)

        assert await handle_notification_created(db, uuid4()) is None
        assert push_service.messages == []
