"""
Auto-assignment tests: a new issue goes to its exact panchayat leader, else
its district leader, else stays unassigned.
"""

from uuid import uuid4

import pytest

from app.core.db import run_with_new_session
from app.db_selectors.issues import get_issue_by_id
from app.models import AdminRole, IssueCategory, IssueStatus
from app.schemas.issues.issue_schemas import IssueCreate, IssueLocation
from app.services.issues import assignment_services
from app.services.issues.assignment_services import AUTO_ASSIGNED_BY, auto_assign_issue
from app.services.issues.issue_services import submit_issue
from app.tasks.issue_tasks import handle_issue_created

from conftest import create_admin

pytestmark = pytest.mark.asyncio


async def create_issue(db, district_id="madurai", panchayat_union_id="melur"):
    issue, _ = await submit_issue(
        db,
        IssueCreate(
            title="Pothole on Melur road",
            description="Deep pothole near the school gate",
            category=IssueCategory.ROAD,
            location=IssueLocation(
                district="Madurai",
                panchayat_union="Melur",
                district_id=district_id,
                panchayat_union_id=panchayat_union_id,
            ),
            submitter_phone="+919812345678",
        ),
    )
    return issue


async def reload(session_factory, issue_id):
    async with session_factory() as session:
        return await get_issue_by_id(session, issue_id)


class TestAutoAssignment:
    async def test_exact_panchayat_leader_is_assigned(self, db, session_factory):
        await create_admin(db, "+919876500101", AdminRole.DISTRICT_LEADER, "madurai", name="District Head")
        leader = await create_admin(
            db, "+919876500102", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", name="Melur Leader"
        )
        issue = await create_issue(db)

        assignee = await auto_assign_issue(db, issue)

        assert assignee.id == leader.id
        stored = await reload(session_factory, issue.id)
        assert stored.status == IssueStatus.ASSIGNED
        assert stored.assigned_to == "Melur Leader"
        assert stored.assigned_by == AUTO_ASSIGNED_BY
        assert stored.assigned_by == "System (Auto-assignment)"

    async def test_district_leader_when_no_panchayat_leader(self, db, session_factory):
        await create_admin(db, "+919876500103", AdminRole.PANCHAYAT_LEADER, "madurai", "vadipatti", name="Other")
        await create_admin(db, "+919876500104", AdminRole.DISTRICT_LEADER, "madurai", name="District Head")
        issue = await create_issue(db)

        await auto_assign_issue(db, issue)

        stored = await reload(session_factory, issue.id)
        assert stored.assigned_to == "District Head"
        assert stored.status == IssueStatus.ASSIGNED

    async def test_assigned_to_falls_back_to_phone(self, db, session_factory):
        await create_admin(db, "+919876500105", AdminRole.DISTRICT_LEADER, "madurai", name="")
        issue = await create_issue(db)

        await auto_assign_issue(db, issue)

        assert (await reload(session_factory, issue.id)).assigned_to == "+919876500105"

    async def test_assignment_ignores_device_token(self, db, session_factory):
        await create_admin(db, "+919876500106", AdminRole.DISTRICT_LEADER, "madurai", fcm_token="t1", name="D")
        await create_admin(db, "+919876500107", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", name="P")
        issue = await create_issue(db)

        await auto_assign_issue(db, issue)

        assert (await reload(session_factory, issue.id)).assigned_to == "P"

    async def test_inactive_leader_is_skipped(self, db, session_factory):
        await create_admin(
            db, "+919876500108", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", name="Gone", is_active=False
        )
        await create_admin(db, "+919876500109", AdminRole.DISTRICT_LEADER, "madurai", name="District Head")
        issue = await create_issue(db)

        await auto_assign_issue(db, issue)

        assert (await reload(session_factory, issue.id)).assigned_to == "District Head"

    async def test_no_match_leaves_issue_untouched(self, db, session_factory):
        await create_admin(db, "+919876500110", AdminRole.SUPER_ADMIN, name="Super")
        await create_admin(db, "+919876500111", AdminRole.DISTRICT_LEADER, "theni", name="Theni Head")
        issue = await create_issue(db)

        assert await auto_assign_issue(db, issue) is None

        stored = await reload(session_factory, issue.id)
        assert stored.status == IssueStatus.SUBMITTED
        assert stored.assigned_to is None
        assert stored.assigned_by is None


class TestAutoAssignmentWithoutGeography:
    async def test_empty_district_never_reads_or_writes(self, db, session_factory, monkeypatch):
        await create_admin(db, "+919876500121", AdminRole.PANCHAYAT_LEADER, "", "", name="Nowhere")
        issue = await create_issue(db, "", "")

        async def unexpected_roster_read(_db):
            raise AssertionError("roster must not be read without a district")

        monkeypatch.setattr(assignment_services, "list_admin_snapshots", unexpected_roster_read)

        assert await auto_assign_issue(db, issue) is None

        stored = await reload(session_factory, issue.id)
        assert stored.status == IssueStatus.SUBMITTED
        assert stored.assigned_to is None


class TestAutoAssignmentFailures:
    async def test_roster_failure_is_swallowed(self, db, session_factory, monkeypatch):
        await create_admin(db, "+919876500131", AdminRole.DISTRICT_LEADER, "madurai", name="District Head")
        issue = await create_issue(db)

        async def broken_roster(_db):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(assignment_services, "list_admin_snapshots", broken_roster)

        assert await auto_assign_issue(db, issue) is None

        stored = await reload(session_factory, issue.id)
        assert stored.status == IssueStatus.SUBMITTED
        assert stored.assigned_to is None

    async def test_write_failure_is_rolled_back(self, db, session_factory, monkeypatch):
        await create_admin(db, "+919876500132", AdminRole.DISTRICT_LEADER, "madurai", name="District Head")
        issue = await create_issue(db)

        async def broken_commit():
            raise RuntimeError("could not serialize access")

        monkeypatch.setattr(db, "commit", broken_commit)

        assert await auto_assign_issue(db, issue) is None

        stored = await reload(session_factory, issue.id)
        assert stored.status == IssueStatus.SUBMITTED
        assert stored.assigned_to is None
        assert stored.assigned_by is None


class TestIssueCreatedHandler:
    async def test_handler_runs_in_its_own_session(self, db, session_factory):
        leader = await create_admin(db, "+919876500141", AdminRole.PANCHAYAT_LEADER, "madurai", "melur", name="P")
        issue = await create_issue(db)

        result = await run_with_new_session(handle_issue_created, issue.id, session_factory=session_factory)

        assert result == leader.id
        assert (await reload(session_factory, issue.id)).status == IssueStatus.ASSIGNED

    async def test_handler_ignores_missing_issue(self, session_factory):
        assert await run_with_new_session(handle_issue_created, uuid4(), session_factory=session_factory) is None
