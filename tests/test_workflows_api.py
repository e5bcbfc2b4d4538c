from datetime import datetime, timedelta, timezone

import pytest

from app.models.report import Report
from app.models.workflow import Workflow, WorkflowExecution
from tests.conftest import OTHER_USER_ID, TEST_USER_ID, auth_header


def _workflow(user_id=TEST_USER_ID, status="running", current_step=2, **extra):
    return Workflow(
        user_id=user_id,
        title="HTTP client survey",
        query="python http client",
        status=status,
        current_step=current_step,
        total_steps=4,
        sources=["web", "github"],
        **extra,
    )


@pytest.mark.asyncio
async def test_list_workflows_with_report(client, db_session, user):
    now = datetime.now(timezone.utc)
    finished = _workflow(status="completed", current_step=4, created_at=now - timedelta(hours=1))
    running = _workflow(created_at=now)
    db_session.add_all([finished, running, _workflow(user_id=OTHER_USER_ID)])
    db_session.flush()
    db_session.add(Report(user_id=TEST_USER_ID, title="Survey", workflow_id=finished.id))
    db_session.commit()

    resp = await client.get("/api/workflows", headers=auth_header())

    assert resp.status_code == 200
    workflows = resp.json()["workflows"]
    assert [w["id"] for w in workflows] == [running.id, finished.id]
    assert workflows[0]["report"] is None
    assert workflows[1]["report"]["title"] == "Survey"
    assert workflows[0]["currentStep"] == 2
    assert workflows[0]["sources"] == ["web", "github"]


@pytest.mark.asyncio
async def test_cancel_running_workflow_fails_open_steps(client, db_session, user):
    workflow = _workflow()
    workflow.executions = [
        WorkflowExecution(step=1, status="completed"),
        WorkflowExecution(step=2, status="running"),
        WorkflowExecution(step=3, status="pending"),
    ]
    db_session.add(workflow)
    db_session.commit()

    resp = await client.post(f"/api/workflows/{workflow.id}/cancel", headers=auth_header())

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Workflow cancelled"}
    db_session.expire_all()
    workflow = db_session.get(Workflow, workflow.id)
    assert workflow.status == "failed"
    assert workflow.error_message == "Cancelled by user"
    assert workflow.failed_step == 2
    assert [e.status for e in workflow.executions] == ["completed", "failed", "failed"]
    assert workflow.executions[1].error == "Cancelled by user"


@pytest.mark.asyncio
async def test_cancel_finished_workflow_is_bad_request(client, db_session, user):
    workflow = _workflow(status="completed")
    db_session.add(workflow)
    db_session.commit()

    resp = await client.post(f"/api/workflows/{workflow.id}/cancel", headers=auth_header())

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Cannot cancel workflow with status: completed"


@pytest.mark.asyncio
async def test_workflow_access_checks(client, db_session):
    theirs = _workflow(user_id=OTHER_USER_ID)
    db_session.add(theirs)
    db_session.commit()

    cancel = await client.post(f"/api/workflows/{theirs.id}/cancel", headers=auth_header())
    delete = await client.delete(f"/api/workflows/{theirs.id}", headers=auth_header())
    missing = await client.delete("/api/workflows/nope", headers=auth_header())

    assert cancel.status_code == 403
    assert delete.status_code == 403
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Workflow not found"
    assert db_session.query(Workflow).one().status == "running"


@pytest.mark.asyncio
async def test_delete_workflow_removes_executions_and_keeps_report(client, db_session, user):
    workflow = _workflow(status="completed")
    workflow.executions = [WorkflowExecution(step=1, status="completed")]
    db_session.add(workflow)
    db_session.flush()
    db_session.add(Report(user_id=TEST_USER_ID, title="Survey", workflow_id=workflow.id))
    db_session.commit()

    resp = await client.delete(f"/api/workflows/{workflow.id}", headers=auth_header())

    assert resp.json() == {"success": True, "message": "Workflow deleted"}
    db_session.expire_all()
    assert db_session.query(Workflow).count() == 0
    assert db_session.query(WorkflowExecution).count() == 0
    assert db_session.query(Report).one().workflow_id is None
