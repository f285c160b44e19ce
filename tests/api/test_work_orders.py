"""Tests for work order endpoints."""

import pytest

NEW_ORDER = {
    "id": "OT.2000",
    "title": "Conveyor roller rebuild",
    "client_id": "Mining Corp",
    "is_budget_approved": False,
    "estimated_completion_date": "2030-01-15T18:00:00Z",
    "tasks": ["Strip rollers", "Replace bearings"],
}


@pytest.mark.asyncio
async def test_list_work_orders(async_client):
    response = await async_client.get("/api/work-orders")
    assert response.status_code == 200

    data = response.json()
    assert data["total"] == 3
    assert {o["id"] for o in data["items"]} == {"OT.1001", "OT.1002", "OT.1003"}


@pytest.mark.asyncio
async def test_list_by_status(async_client):
    response = await async_client.get("/api/work-orders", params={"status": "in_process"})
    assert [o["id"] for o in response.json()["items"]] == ["OT.1001"]


@pytest.mark.asyncio
async def test_create_and_get(async_client):
    response = await async_client.post("/api/work-orders", json=NEW_ORDER)
    assert response.status_code == 201

    data = response.json()
    assert data["status"] == "pending"
    assert data["pending_task_count"] == 2
    assert data["cost_total"] == 0

    response = await async_client.get("/api/work-orders/OT.2000")
    assert response.status_code == 200
    assert response.json()["title"] == "Conveyor roller rebuild"


@pytest.mark.asyncio
async def test_create_duplicate_id(async_client):
    response = await async_client.post("/api/work-orders", json={**NEW_ORDER, "id": "OT.1001"})
    assert response.status_code == 400
    assert response.json()["error_code"] == "DUPLICATE_ENTITY"


@pytest.mark.asyncio
async def test_create_missing_fields(async_client):
    response = await async_client.post("/api/work-orders", json={"id": "OT.2001"})
    assert response.status_code == 422

    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert "title" in data["detail"]


@pytest.mark.asyncio
async def test_unknown_order(async_client):
    response = await async_client.get("/api/work-orders/OT.9999")
    assert response.status_code == 404

    data = response.json()
    assert data["error_code"] == "WORK_ORDER_NOT_FOUND"
    assert data["hint"]
    assert data["path"] == "/api/work-orders/OT.9999"


@pytest.mark.asyncio
async def test_budget_gate(async_client):
    """An order waiting on its quote cannot start until approved."""
    await async_client.post("/api/work-orders", json=NEW_ORDER)

    response = await async_client.post("/api/work-orders/OT.2000/start")
    assert response.status_code == 409
    assert response.json()["error_code"] == "BUDGET_NOT_APPROVED"

    response = await async_client.post("/api/work-orders/OT.2000/approve-budget")
    assert response.status_code == 200
    assert response.json()["is_budget_approved"] is True

    response = await async_client.post("/api/work-orders/OT.2000/start")
    assert response.status_code == 200
    assert response.json()["work_order"]["status"] == "in_process"


@pytest.mark.asyncio
async def test_invalid_transition(async_client):
    response = await async_client.post("/api/work-orders/OT.1003/pause")
    assert response.status_code == 409
    assert response.json()["error_code"] == "INVALID_STATUS_TRANSITION"


@pytest.mark.asyncio
async def test_unknown_action(async_client):
    response = await async_client.post("/api/work-orders/OT.1001/explode")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_finish_reports_pending_tasks(async_client):
    response = await async_client.post(
        "/api/work-orders/OT.1001/finish", json={"final_notes": "Delivered with guide 551"}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["work_order"]["status"] == "finished"
    assert data["work_order"]["final_notes"] == "Delivered with guide 551"
    assert data["pending_tasks"] == 2
    assert data["warning"] == "Finished with 2 pending task(s)"


@pytest.mark.asyncio
async def test_book_labor_and_service(async_client):
    response = await async_client.post(
        "/api/work-orders/OT.1001/labor",
        json={"technician_id": "U3", "hours": 2, "hourly_rate": 10000},
    )
    assert response.status_code == 201
    assert response.json()["labor_hours_total"] == 6

    response = await async_client.post(
        "/api/work-orders/OT.1001/services",
        json={"provider": "Chrome Works", "cost": 80000},
    )
    assert response.status_code == 201
    assert response.json()["services_total"] == 80000


@pytest.mark.asyncio
async def test_labor_rejects_non_positive_hours(async_client):
    response = await async_client.post(
        "/api/work-orders/OT.1001/labor", json={"technician_id": "U3", "hours": 0}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_tasks_and_comments(async_client):
    response = await async_client.post(
        "/api/work-orders/OT.1002/tasks", json={"description": "Cut plates"}
    )
    assert response.status_code == 201
    task = response.json()["task"]
    assert task["is_completed"] is False

    response = await async_client.post(f"/api/work-orders/OT.1002/tasks/{task['id']}/toggle")
    assert response.status_code == 200
    assert response.json()["task"]["is_completed"] is True

    response = await async_client.post(
        "/api/work-orders/OT.1002/comments",
        json={"text": "Steel arrived", "user_name": "Ana"},
        headers={"X-User-Id": "U7"},
    )
    assert response.status_code == 201
    assert response.json()["comment"]["user_id"] == "U7"


@pytest.mark.asyncio
async def test_unknown_task(async_client):
    response = await async_client.post("/api/work-orders/OT.1001/tasks/nope/toggle")
    assert response.status_code == 404
    assert response.json()["error_code"] == "TASK_NOT_FOUND"


@pytest.mark.asyncio
async def test_patch_order(async_client):
    response = await async_client.patch(
        "/api/work-orders/OT.1002", json={"priority": "high", "machine": "Lathe 3"}
    )
    assert response.status_code == 200
    assert response.json()["machine"] == "Lathe 3"
