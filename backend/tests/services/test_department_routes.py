"""Department Routes — department list and paginated rosters over HTTP.

Invariants:
    - Departments listed in dept_no order
    - Rosters are 1-indexed pages; page < 1 is 400, past the end is empty
    - Unknown department is 404
"""

from tests.services.seed_data import DEPARTMENTS, add_departments, add_employee


async def _seed_roster(session_factory, count, dept_no="d005"):
    await add_departments(session_factory)
    for offset in range(count):
        await add_employee(session_factory, emp_no=20001 + offset, dept_no=dept_no)


async def test_list_departments(client, test_session_factory):
    await add_departments(test_session_factory)

    res = await client.get("/api/v1/departments")

    assert res.status_code == 200
    assert [d["dept_no"] for d in res.json()] == sorted(DEPARTMENTS)
    assert res.json()[0] == {"dept_no": "d001", "dept_name": "Marketing"}


async def test_roster_first_page_holds_twenty(client, test_session_factory):
    await _seed_roster(test_session_factory, 25)

    res = await client.get("/api/v1/departments/d005/employees")

    assert res.status_code == 200
    data = res.json()
    assert data["page"] == 1
    assert data["page_size"] == 20
    assert [e["emp_no"] for e in data["employees"]] == list(range(20001, 20021))


async def test_roster_second_page_holds_the_rest(client, test_session_factory):
    await _seed_roster(test_session_factory, 25)

    res = await client.get("/api/v1/departments/D005/employees", params={"page": 2})

    data = res.json()
    assert data["dept_no"] == "d005"
    assert [e["emp_no"] for e in data["employees"]] == list(range(20021, 20026))
    assert set(data["employees"][0]) == {
        "emp_no", "hire_date", "first_name", "last_name",
    }


async def test_page_past_the_end_is_empty(client, test_session_factory):
    await _seed_roster(test_session_factory, 3)
    res = await client.get("/api/v1/departments/d005/employees", params={"page": 9})
    assert res.status_code == 200
    assert res.json()["employees"] == []


async def test_page_zero_is_rejected(client, test_session_factory):
    await _seed_roster(test_session_factory, 1)
    res = await client.get("/api/v1/departments/d005/employees", params={"page": 0})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_unknown_department_is_404(client, test_session_factory):
    await add_departments(test_session_factory)
    res = await client.get("/api/v1/departments/d999/employees")
    assert res.status_code == 404


async def test_health_probes(client):
    live = await client.get("/api/v1/health/")
    ready = await client.get("/api/v1/health/ready")
    assert live.json()["service"] == "tenure-api"
    assert ready.status_code == 200
