"""Task routes — /api/tareas CRUD over HTTP.

Invariants:
    - POST → 201 {id, descripcion, completada: 0}; empty/absent descripcion → 400, no row
    - PUT → 200 message; bad id / non-boolean completada → 400; unknown id → 404
    - DELETE → 200 message; bad id → 400; unknown id → 404
    - GET lists newest first with completada as 0/1
"""

import pytest


async def _create(client, descripcion="Comprar pan"):
    res = await client.post("/api/tareas", json={"descripcion": descripcion})
    assert res.status_code == 201
    return res.json()


# --- Scenario -----------------------------------------------------------------

async def test_full_task_lifecycle(client):
    created = await _create(client, "Buy bread")
    assert created == {"id": created["id"], "descripcion": "Buy bread", "completada": 0}
    task_id = created["id"]

    listed = (await client.get("/api/tareas")).json()
    assert [t["id"] for t in listed] == [task_id]

    res = await client.put(f"/api/tareas/{task_id}", json={"completada": True})
    assert res.status_code == 200
    assert res.json() == {"message": "Tarea actualizada correctamente"}
    [task] = (await client.get("/api/tareas")).json()
    assert task["completada"] == 1

    res = await client.delete(f"/api/tareas/{task_id}")
    assert res.status_code == 200
    assert res.json() == {"message": "Tarea eliminada correctamente"}
    assert (await client.get("/api/tareas")).json() == []


# --- GET ----------------------------------------------------------------------

async def test_list_empty(client):
    res = await client.get("/api/tareas")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_newest_first(client):
    ids = [(await _create(client, f"Tarea {n}"))["id"] for n in range(3)]
    listed = (await client.get("/api/tareas")).json()
    assert [t["id"] for t in listed] == list(reversed(ids))


async def test_list_task_shape(client):
    await _create(client, "Forma")
    [task] = (await client.get("/api/tareas")).json()
    assert set(task) == {"id", "descripcion", "completada", "fecha_creacion"}
    assert task["completada"] == 0


# --- POST ---------------------------------------------------------------------

async def test_create_assigns_fresh_ids(client):
    first = await _create(client, "Uno")
    second = await _create(client, "Dos")
    assert first["id"] != second["id"]


async def test_create_strips_description(client):
    created = await _create(client, "  Regar plantas  ")
    assert created["descripcion"] == "Regar plantas"


@pytest.mark.parametrize("body", [
    {},
    {"descripcion": ""},
    {"descripcion": "   "},
    {"descripcion": None},
    {"descripcion": 42},
])
async def test_create_rejects_missing_description(client, body):
    res = await client.post("/api/tareas", json=body)
    assert res.status_code == 400
    assert res.json()["error"] == "La descripción es requerida"
    assert (await client.get("/api/tareas")).json() == []


async def test_create_without_body_is_400(client):
    res = await client.post("/api/tareas")
    assert res.status_code == 400
    assert res.json()["error"] == "La descripción es requerida"


# --- PUT ----------------------------------------------------------------------

async def test_update_false_sets_zero(client):
    task = await _create(client)
    await client.put(f"/api/tareas/{task['id']}", json={"completada": True})
    res = await client.put(f"/api/tareas/{task['id']}", json={"completada": False})
    assert res.status_code == 200
    [row] = (await client.get("/api/tareas")).json()
    assert row["completada"] == 0


@pytest.mark.parametrize("value", [1, 0, "true", None])
async def test_update_rejects_non_boolean(client, value):
    task = await _create(client)
    res = await client.put(f"/api/tareas/{task['id']}", json={"completada": value})
    assert res.status_code == 400
    assert res.json()["error"] == 'El estado "completada" debe ser un booleano'


async def test_update_missing_flag_is_400(client):
    task = await _create(client)
    res = await client.put(f"/api/tareas/{task['id']}", json={})
    assert res.status_code == 400
    assert res.json()["error"] == 'El estado "completada" debe ser un booleano'


async def test_update_invalid_id_is_400(client):
    res = await client.put("/api/tareas/abc", json={"completada": True})
    assert res.status_code == 400
    assert res.json()["error"] == "ID de tarea inválido o faltante"


async def test_update_invalid_id_reported_before_body(client):
    res = await client.put("/api/tareas/abc", json={"completada": "yes"})
    assert res.json()["error"] == "ID de tarea inválido o faltante"


@pytest.mark.parametrize("task_id", ["99999999999999999999", "2147483648", "-2147483649"])
async def test_update_out_of_range_id_is_400(client, task_id):
    res = await client.put(f"/api/tareas/{task_id}", json={"completada": True})
    assert res.status_code == 400
    assert res.json()["error"] == "ID de tarea inválido o faltante"


async def test_update_largest_column_id_is_404(client):
    res = await client.put("/api/tareas/2147483647", json={"completada": True})
    assert res.status_code == 404


async def test_update_unknown_id_is_404(client):
    res = await client.put("/api/tareas/999", json={"completada": True})
    assert res.status_code == 404
    assert res.json()["error"] == "Tarea no encontrada"


# --- DELETE -------------------------------------------------------------------

async def test_delete_invalid_id_is_400(client):
    res = await client.delete("/api/tareas/uno")
    assert res.status_code == 400
    assert res.json()["error"] == "ID de tarea inválido o faltante"


@pytest.mark.parametrize("task_id", ["99999999999999999999", "2147483648", "-2147483649"])
async def test_delete_out_of_range_id_is_400(client, task_id):
    res = await client.delete(f"/api/tareas/{task_id}")
    assert res.status_code == 400
    assert res.json()["error"] == "ID de tarea inválido o faltante"


async def test_delete_unknown_id_is_404(client):
    res = await client.delete("/api/tareas/999")
    assert res.status_code == 404
    assert res.json()["error"] == "Tarea no encontrada"


async def test_delete_leaves_other_tasks(client):
    keep = await _create(client, "Mantener")
    gone = await _create(client, "Borrar")
    await client.delete(f"/api/tareas/{gone['id']}")
    listed = (await client.get("/api/tareas")).json()
    assert [t["id"] for t in listed] == [keep["id"]]


async def test_deleted_task_cannot_be_updated(client):
    task = await _create(client)
    await client.delete(f"/api/tareas/{task['id']}")
    res = await client.put(f"/api/tareas/{task['id']}", json={"completada": True})
    assert res.status_code == 404


# --- Pool hygiene -------------------------------------------------------------

async def test_requests_return_connections_to_pool(client, pool):
    task = await _create(client)
    await client.get("/api/tareas")
    await client.put(f"/api/tareas/{task['id']}", json={"completada": True})
    await client.put("/api/tareas/999", json={"completada": True})
    await client.delete(f"/api/tareas/{task['id']}")
    assert pool.engine.sync_engine.pool.checkedout() == 0
