import json
from pathlib import Path

from budget_core.domain.models import Category, Frequency, Goal, Income, IncomeType, MonthRecord, RecordPatch
from budget_core.io.store_file import JsonStorePersistence
from budget_core.services.goals import monthly_contribution
from budget_core.services.month_store import update_record


FIXTURE = Path(__file__).parent / "data" / "store.json"


def _custom_store():
    return {
        "2023-11": MonthRecord(
            income=Income(amount=52000.0, type=IncomeType.SALARY, frequency=Frequency.YEARLY),
            categories={
                "rent": Category("rent", "Rent", 45.5),
                "savings": Category("savings", "Savings", 30),
                "fun": Category("fun", "Fun & Games", 24.5),
            },
            goal=Goal(target=5000.0, months=10),
            spending={"rent": 1650.25, "fun": 80.0},
        ),
        "2024-01": MonthRecord(
            income=Income(amount=250.0, type=IncomeType.JOB, frequency=Frequency.WEEKLY),
            categories={"savings": Category("savings", "Savings", 100)},
            goal=Goal(),
            spending={},
        ),
    }


def test_round_trip(tmp_path: Path):
    persistence = JsonStorePersistence(tmp_path / "nested" / "store.json")
    store = _custom_store()
    persistence.save(store)
    assert persistence.load() == store


def test_saved_shape_matches_blob_format(tmp_path: Path):
    path = tmp_path / "store.json"
    JsonStorePersistence(path).save(_custom_store())
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert list(payload) == ["2023-11", "2024-01"]
    assert payload["2024-01"]["goal"] == {"target": "", "months": ""}
    assert payload["2023-11"]["income"] == {"amount": 52000.0, "type": "Salary", "frequency": "Yearly"}
    assert payload["2023-11"]["categories"]["fun"] == {"name": "Fun & Games", "percent": 24.5}


def test_missing_file_loads_empty(tmp_path: Path):
    assert JsonStorePersistence(tmp_path / "absent.json").load() == {}


def test_corrupt_file_loads_empty(tmp_path: Path, caplog):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonStorePersistence(path).load() == {}
    assert "Could not read store" in caplog.text


def test_non_object_payload_loads_empty(tmp_path: Path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert JsonStorePersistence(path).load() == {}


def test_string_values_are_coerced_and_bad_months_skipped():
    store = JsonStorePersistence(FIXTURE).load()
    assert list(store) == ["2024-01"]
    record = store["2024-01"]
    assert record.income.amount == 3000
    assert record.categories["food"].percent == 35
    assert record.goal == Goal(target=1200, months=6)
    assert record.spending == {"food": 1100, "bills": 400}


def test_empty_categories_survive_round_trip(tmp_path: Path):
    persistence = JsonStorePersistence(tmp_path / "store.json")
    store = update_record({}, "2024-01", RecordPatch(income=Income(amount=10), categories={}))
    persistence.save(store)
    loaded = persistence.load()
    assert loaded == store
    assert loaded["2024-01"].categories == {}


def test_missing_categories_fall_back_to_defaults():
    record = MonthRecord.from_dict({"income": {"amount": 5}})
    assert list(record.categories) == ["food", "bills", "lifestyle", "savings", "misc", "others"]


def test_fractional_goal_months_survive_round_trip(tmp_path: Path):
    persistence = JsonStorePersistence(tmp_path / "store.json")
    store = update_record({}, "2024-01", RecordPatch(goal=Goal(target=300, months=1.5)))
    persistence.save(store)
    loaded = persistence.load()
    assert loaded == store
    assert monthly_contribution(loaded["2024-01"].goal) == 200
