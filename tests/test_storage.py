import json
import math

from prevoyance.backend import _sanitize_records
from prevoyance.engine.state import InsuranceState, ThirdPillarState
from prevoyance.engine.storage import _sanitize_json_compat, load_records, save_records


def test_sanitize_json_compat_replaces_special_numbers():
    payload = {
        "float": math.nan,
        "list": [1, float("inf"), -float("inf")],
        "nested": {"value": math.nan},
    }

    clean = _sanitize_json_compat(payload)

    assert clean == {
        "float": None,
        "list": [1, None, None],
        "nested": {"value": None},
    }


def test_save_records_persists_sanitized_values(tmp_path):
    path = tmp_path / "records.json"
    data = {"abc": {"value": math.nan, "items": [1, float("inf")]}}

    save_records(str(path), data)

    with path.open("r", encoding="utf-8") as handle:
        stored = json.load(handle)

    assert stored == {"abc": {"value": None, "items": [1, None]}}
    assert not (tmp_path / "records.json.tmp").exists()


def test_load_records_tolerates_missing_and_corrupt_files(tmp_path):
    assert load_records(str(tmp_path / "missing.json")) == {}

    corrupt = tmp_path / "corrupt.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert load_records(str(corrupt)) == {}

    wrong_shape = tmp_path / "list.json"
    wrong_shape.write_text("[1, 2]", encoding="utf-8")
    assert load_records(str(wrong_shape)) == {}


def test_sanitize_records_used_for_api_payloads():
    rows = [{"value": float("nan"), "other": 5}]

    clean = _sanitize_records(rows)

    assert clean == [{"value": None, "other": 5}]


def test_insurance_state_round_trip_and_active_filter(tmp_path):
    path = str(tmp_path / "insurance.json")
    state = InsuranceState(path)

    first = state.save(
        {"profile_id": "p1", "insurance_type": "vehicle", "company_name": "Auto SA", "annual_premium": 900}
    )
    second = state.save(
        {"profile_id": "p1", "insurance_type": "health_basic", "company_name": "Santé", "annual_premium": 4200}
    )
    state.save(
        {
            "profile_id": "p1",
            "insurance_type": "life",
            "company_name": "Vie SA",
            "annual_premium": 1000,
            "is_active": False,
        }
    )
    state.save({"profile_id": "p2", "insurance_type": "life", "company_name": "Autre", "annual_premium": 50})

    assert first.success and second.success

    reloaded = InsuranceState(path)
    contracts = reloaded.list_for_profile("p1")

    assert [c.insurance_type for c in contracts] == ["health_basic", "vehicle"]
    assert contracts[0].deductible == 0.0


def test_update_merges_existing_record(tmp_path):
    state = ThirdPillarState(str(tmp_path / "third.json"))
    created = state.save(
        {
            "profile_id": "p1",
            "account_type": "3a_bank",
            "institution_name": "Banque",
            "current_amount": 1000,
            "annual_contribution": 500,
            "return_rate": 2,
        }
    )
    account_id = created.data["id"]

    updated = state.save({"id": account_id, "current_amount": 1500})

    assert updated.success
    account = state.get(account_id)
    assert account.current_amount == 1500
    assert account.annual_contribution == 500
    assert account.created_at == created.data["created_at"]


def test_update_and_delete_unknown_record_report_failure(tmp_path):
    state = ThirdPillarState(str(tmp_path / "third.json"))

    update = state.save({"id": "nope", "current_amount": 10})
    delete = state.delete("nope")

    assert not update.success
    assert "not found" in update.error
    assert not delete.success


def test_save_failure_is_reported_not_raised(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a folder", encoding="utf-8")
    state = InsuranceState(str(blocker / "insurance.json"))

    result = state.save({"profile_id": "p1", "insurance_type": "life", "company_name": "Vie SA"})

    assert not result.success
    assert result.error
    assert state.records == {}


def test_form_encoded_inactive_flag_is_respected(tmp_path):
    state = InsuranceState(str(tmp_path / "insurance.json"))
    state.save({"profile_id": "p1", "insurance_type": "life", "company_name": "Vie SA", "is_active": "false"})
    state.save({"profile_id": "p1", "insurance_type": "vehicle", "company_name": "Auto SA", "is_active": "0"})
    state.save({"profile_id": "p1", "insurance_type": "household", "company_name": "Ménage SA", "is_active": "yes"})

    contracts = state.list_for_profile("p1")

    assert [c.insurance_type for c in contracts] == ["household"]
    assert len(state.list_for_profile("p1", active_only=False)) == 3
