import pytest

from taskgen.errors import SchemaViolation
from taskgen.models import task_list_json_schema, validate_task_list

from .fakes import PC_TASKS


def make_tasks(count):
    return [
        {"name": f"Task {i}", "description": f"Do step {i}", "timeframe": "1 hour"}
        for i in range(count)
    ]


@pytest.mark.parametrize("count", [3, 4, 5])
def test_accepts_three_to_five_tasks(count):
    tasks = validate_task_list({"tasks": make_tasks(count)})
    assert len(tasks) == count
    assert tasks[0].name == "Task 0"


@pytest.mark.parametrize("count", [0, 2, 6])
def test_rejects_count_out_of_range(count):
    with pytest.raises(SchemaViolation):
        validate_task_list({"tasks": make_tasks(count)})


def test_preserves_order():
    tasks = validate_task_list({"tasks": PC_TASKS})
    assert [t.name for t in tasks] == [t["name"] for t in PC_TASKS]


@pytest.mark.parametrize("data", [None, [], "tasks", {"items": PC_TASKS}])
def test_rejects_non_task_list_objects(data):
    with pytest.raises(SchemaViolation):
        validate_task_list(data)


@pytest.mark.parametrize("field", ["name", "description", "timeframe"])
def test_rejects_missing_field(field):
    tasks = make_tasks(3)
    del tasks[1][field]
    with pytest.raises(SchemaViolation):
        validate_task_list({"tasks": tasks})


@pytest.mark.parametrize("value", [3, None, ["a"], "", "   "])
def test_rejects_wrong_type_or_blank_field(value):
    tasks = make_tasks(3)
    tasks[0]["timeframe"] = value
    with pytest.raises(SchemaViolation):
        validate_task_list({"tasks": tasks})


def test_json_schema_constrains_count_and_fields():
    schema = task_list_json_schema()
    tasks = schema["properties"]["tasks"]

    assert schema["required"] == ["tasks"]
    assert tasks["minItems"] == 3
    assert tasks["maxItems"] == 5
    assert set(tasks["items"]["required"]) == {"name", "description", "timeframe"}
    for prop in tasks["items"]["properties"].values():
        assert prop["type"] == "string"
    assert "$ref" not in str(schema)
