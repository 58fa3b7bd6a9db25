"""Tests for task rules — pure field coercion and serialization, no IO."""

from datetime import datetime, timezone

import pytest

from lista_tareas.core.task_rules import (
    DESCRIPCION_REQUIRED, coerce_completada, normalize_descripcion, serialize_task,
)


@pytest.mark.parametrize("value, expected", [
    (True, 1), (False, 0), (1, 1), (0, 0), (None, 0),
    ("1", 1), ("0", 0), ("true", 1), ("false", 0), (" TRUE ", 1),
    (b"\x01", 1), (b"\x00", 0),
])
def test_coerce_completada_always_zero_or_one(value, expected):
    assert coerce_completada(value) == expected


def test_normalize_descripcion_strips():
    assert normalize_descripcion("  Leer  ") == "Leer"


@pytest.mark.parametrize("value", ["", "   ", None, 5, ["x"]])
def test_normalize_descripcion_rejects_empty_or_non_text(value):
    with pytest.raises(ValueError, match=DESCRIPCION_REQUIRED):
        normalize_descripcion(value)


def test_serialize_task_formats_timestamp_and_flag():
    created = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    row = {"id": 7, "descripcion": "Leer", "completada": True, "fecha_creacion": created}
    assert serialize_task(row) == {
        "id": 7,
        "descripcion": "Leer",
        "completada": 1,
        "fecha_creacion": "2026-01-02T03:04:05+00:00",
    }


def test_serialize_task_keeps_string_timestamp():
    row = {"id": 1, "descripcion": "x", "completada": 0, "fecha_creacion": "2026-01-02 03:04:05"}
    assert serialize_task(row)["fecha_creacion"] == "2026-01-02 03:04:05"
