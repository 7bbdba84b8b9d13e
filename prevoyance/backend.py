"""REST backend for the personal-finance portal calculations."""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from prevoyance.config import Settings, load_settings_from_env
from prevoyance.data_model import (
    ACCOUNT_TYPE_LABELS,
    INSURANCE_TYPE_LABELS,
    InsuranceContractTableModel,
    TableModel,
    ThirdPillarTableModel,
)
from prevoyance.engine import (
    MAX_AGE,
    TaxEstimator,
    TaxInput,
    age_from_birth_date,
    analyze_insurance,
    analyze_lpp,
    analyze_third_pillar,
    avs_pensions,
)
from prevoyance.engine.state import (
    InsuranceState,
    LPPState,
    OperationResult,
    ProfileState,
    RecordState,
    ThirdPillarState,
)
from prevoyance.errors import PrevoyanceError
from prevoyance.logging_config import setup_logger

INSURANCE_MODEL = InsuranceContractTableModel()
THIRD_PILLAR_MODEL = ThirdPillarTableModel()

TRUTHY = {"1", "true", "yes", "on", "marie"}


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _model_payload(model: TableModel) -> Dict[str, Any]:
    defaults = _sanitize_records(model.create_default_df().to_dict("records"))
    return {
        "name": model.name,
        "columns": [col.to_payload() for col in model.columns],
        "defaults": defaults,
        "required": model.required_fields(),
    }


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] not in (None, ""):
            return payload[key]
    return default


def _number(payload: dict, *keys: str, default: float = 0.0) -> float:
    raw = _extract_payload_value(payload, *keys, default=default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{keys[0]}' must be a number, got {raw!r}.") from exc
    if not math.isfinite(value):
        raise ValueError(f"'{keys[0]}' must be a finite number.")
    return value


def _age(payload: dict, key: str, default: float = 0.0) -> int:
    age = int(_number(payload, key, default=default))
    if not 0 <= age <= MAX_AGE:
        raise ValueError(f"'{key}' must be between 0 and {MAX_AGE}, got {age}.")
    return age


def parse_tax_input(payload: dict) -> TaxInput:
    married_raw = _extract_payload_value(payload, "married", "etatCivil", default=False)
    return TaxInput(
        income=_number(payload, "income", "revenuAnnuel"),
        wealth=_number(payload, "wealth", "fortune"),
        children=int(_number(payload, "children", "nombreEnfants")),
        married=str(married_raw).strip().lower() in TRUTHY,
        third_pillar_deduction=max(0.0, _number(payload, "thirdPillarDeduction", "deduction3emePilier")),
        mortgage_interest=max(0.0, _number(payload, "mortgageInterest", "interetsHypothecaires")),
        other_deductions=max(0.0, _number(payload, "otherDeductions", "autresDeductions")),
    )


def _result_response(result: OperationResult, created: bool = False):
    if result.success:
        return jsonify(result.to_dict()), 201 if created else 200
    status = 404 if result.error and "not found" in result.error else 500
    return jsonify(result.to_dict()), status


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or load_settings_from_env()
    logger = setup_logger("prevoyance.backend", level=settings.log_level, log_file=settings.log_file)

    app = Flask(__name__)
    app.config["PREVOYANCE_SETTINGS"] = settings

    profiles = ProfileState(settings.storage_path("profiles"))
    insurance_state = InsuranceState(settings.storage_path("insurance_contracts"))
    third_pillar_state = ThirdPillarState(settings.storage_path("third_pillar_accounts"))
    lpp_state = LPPState(settings.storage_path("lpp_accounts"))
    estimator = TaxEstimator()

    def _profile_or_404(profile_id: str):
        profile = profiles.get(profile_id)
        if profile is None:
            return None, (jsonify({"error": f"Profile {profile_id} not found."}), 404)
        return profile, None

    def _create_for_profile(state: RecordState, profile_id: str):
        _, missing = _profile_or_404(profile_id)
        if missing:
            return missing
        payload = request.get_json(silent=True) or {}
        record_id = str(payload.get("id") or "").strip()
        if record_id:
            existing = state.records.get(record_id)
            if existing is None or existing.get("profile_id") != profile_id:
                return jsonify({"error": f"Record {record_id} not found for profile {profile_id}."}), 404
        payload["profile_id"] = profile_id
        result = state.save(payload)
        return _result_response(result, created=not payload.get("id"))

    @app.errorhandler(PrevoyanceError)
    def handle_domain_error(exc: PrevoyanceError):
        logger.warning(f"Rejected request {request.method} {request.path}: {exc}")
        return jsonify({"error": str(exc), "field": getattr(exc, "field", None)}), 400

    @app.errorhandler(ValueError)
    def handle_value_error(exc: ValueError):
        logger.warning(f"Rejected request {request.method} {request.path}: {exc}")
        return jsonify({"error": str(exc)}), 400

    @app.after_request
    def apply_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type,Authorization"
        return response

    @app.get("/api/health")
    def healthcheck():
        return jsonify({"status": "ok"})

    @app.get("/api/schema")
    def get_schema():
        return jsonify(
            {
                "insurance": _model_payload(INSURANCE_MODEL),
                "thirdPillar": _model_payload(THIRD_PILLAR_MODEL),
                "insuranceTypeLabels": INSURANCE_TYPE_LABELS,
                "accountTypeLabels": ACCOUNT_TYPE_LABELS,
                "retirementAge": settings.retirement_age,
            }
        )

    @app.get("/api/tax/estimate")
    def tax_estimate_query():
        values = parse_tax_input(request.args.to_dict())
        return jsonify(estimator.estimate(values).to_dict())

    @app.post("/api/tax/estimate")
    def tax_estimate():
        values = parse_tax_input(request.get_json(silent=True) or {})
        return jsonify(estimator.estimate(values).to_dict())

    @app.get("/api/avs/pension")
    def avs_pension():
        income = _number(request.args.to_dict(), "income", "revenu")
        if income <= 0:
            return jsonify({"error": "Veuillez entrer un revenu valide."}), 400
        return jsonify(avs_pensions(income).to_dict())

    @app.get("/api/profiles")
    def list_profiles():
        return jsonify({"profiles": [profile.to_dict() for profile in profiles.list_all()]})

    @app.post("/api/profiles")
    def save_profile():
        payload = request.get_json(silent=True) or {}
        return _result_response(profiles.save(payload), created=not payload.get("id"))

    @app.get("/api/profiles/<profile_id>")
    def get_profile(profile_id: str):
        profile, missing = _profile_or_404(profile_id)
        if missing:
            return missing
        return jsonify(profile.to_dict())

    @app.get("/api/profiles/<profile_id>/insurance")
    def list_insurance(profile_id: str):
        contracts = insurance_state.list_for_profile(profile_id)
        return jsonify({"contracts": [contract.to_dict() for contract in contracts]})

    @app.post("/api/profiles/<profile_id>/insurance")
    def save_insurance(profile_id: str):
        return _create_for_profile(insurance_state, profile_id)

    @app.delete("/api/insurance/<contract_id>")
    def delete_insurance(contract_id: str):
        return _result_response(insurance_state.delete(contract_id))

    @app.get("/api/profiles/<profile_id>/insurance/analysis")
    def insurance_analysis(profile_id: str):
        contracts = insurance_state.list_for_profile(profile_id)
        return jsonify(analyze_insurance(contracts).to_dict())

    @app.get("/api/profiles/<profile_id>/third-pillar")
    def list_third_pillar(profile_id: str):
        accounts = third_pillar_state.list_for_profile(profile_id)
        return jsonify({"accounts": [account.to_dict() for account in accounts]})

    @app.post("/api/profiles/<profile_id>/third-pillar")
    def save_third_pillar(profile_id: str):
        return _create_for_profile(third_pillar_state, profile_id)

    @app.delete("/api/third-pillar/<account_id>")
    def delete_third_pillar(account_id: str):
        return _result_response(third_pillar_state.delete(account_id))

    @app.get("/api/profiles/<profile_id>/third-pillar/analysis")
    def third_pillar_analysis(profile_id: str):
        profile, missing = _profile_or_404(profile_id)
        if missing:
            return missing
        args = request.args.to_dict()
        retirement_age = _age(args, "retirementAge", default=settings.retirement_age)
        if "currentAge" in args:
            current_age = _age(args, "currentAge")
        elif profile.date_naissance is not None:
            current_age = age_from_birth_date(profile.date_naissance, date.today())
        else:
            return jsonify({"error": "Date de naissance manquante pour ce profil."}), 400
        accounts = third_pillar_state.list_for_profile(profile_id)
        analysis = analyze_third_pillar(accounts, current_age, retirement_age)
        return jsonify(analysis.to_dict())

    @app.get("/api/profiles/<profile_id>/lpp")
    def list_lpp(profile_id: str):
        accounts = lpp_state.list_for_profile(profile_id)
        return jsonify({"accounts": [account.to_dict() for account in accounts]})

    @app.post("/api/profiles/<profile_id>/lpp")
    def save_lpp(profile_id: str):
        return _create_for_profile(lpp_state, profile_id)

    @app.delete("/api/lpp/<account_id>")
    def delete_lpp(account_id: str):
        return _result_response(lpp_state.delete(account_id))

    @app.get("/api/profiles/<profile_id>/lpp/analysis")
    def lpp_analysis(profile_id: str):
        accounts = lpp_state.list_for_profile(profile_id)
        return jsonify(analyze_lpp(accounts).to_dict())

    logger.info(f"Portal backend ready (data dir: {settings.data_dir})")
    return app


app = create_app()


if __name__ == "__main__":
    app_settings = app.config["PREVOYANCE_SETTINGS"]
    app.run(debug=app_settings.debug, port=app_settings.port)
