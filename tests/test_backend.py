from datetime import date

import pytest

from prevoyance.backend import create_app, parse_tax_input
from prevoyance.config import Settings


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(data_dir=str(tmp_path), log_level="WARNING"))
    app.testing = True
    return app.test_client()


@pytest.fixture
def profile_id(client):
    response = client.post(
        "/api/profiles",
        json={"first_name": "Anne", "last_name": "Favre", "date_naissance": f"{date.today().year - 63}-06-15"},
    )
    assert response.status_code == 201
    return response.get_json()["data"]["id"]


def test_healthcheck(client):
    response = client.get("/api/health")

    assert response.get_json() == {"status": "ok"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_schema_lists_form_models(client):
    payload = client.get("/api/schema").get_json()

    fields = [col["field"] for col in payload["insurance"]["columns"]]
    assert "annual_premium" in fields
    assert payload["insurance"]["required"] == ["insurance_type", "company_name"]
    assert len(payload["thirdPillar"]["defaults"]) == 2
    assert payload["insuranceTypeLabels"]["health_basic"] == "Assurance maladie de base (LAMal)"
    assert payload["retirementAge"] == 65


def test_tax_estimate_get_and_post(client):
    by_query = client.get("/api/tax/estimate?income=10000").get_json()
    by_body = client.post("/api/tax/estimate", json={"revenuAnnuel": "10000", "fortune": "40000"}).get_json()

    assert by_query["income_tax"] == 313.0
    assert by_query["wealth_tax"] == 0.0
    assert by_body["total_tax"] == 313.0
    assert by_body["jurisdiction"] == "VD-2025"


def test_tax_estimate_rejects_non_numeric_income(client):
    response = client.get("/api/tax/estimate?income=abc")

    assert response.status_code == 400
    assert "income" in response.get_json()["error"]


def test_parse_tax_input_reads_form_aliases():
    values = parse_tax_input({"revenuAnnuel": "90000", "nombreEnfants": "1", "etatCivil": "marie"})

    assert values.income == 90000
    assert values.children == 1
    assert values.married is True


def test_avs_pension_endpoint(client):
    assert client.get("/api/avs/pension?income=50000").get_json()["rente_vieillesse_mensuelle"] == 1785
    assert client.get("/api/avs/pension?income=0").status_code == 400


def test_unknown_profile_is_404(client):
    assert client.get("/api/profiles/missing").status_code == 404
    assert client.post("/api/profiles/missing/insurance", json={}).status_code == 404


def test_insurance_crud_and_analysis(client, profile_id):
    created = client.post(
        f"/api/profiles/{profile_id}/insurance",
        json={"insurance_type": "life", "company_name": "Vie SA", "annual_premium": 2400, "death_capital": 100000},
    )
    client.post(
        f"/api/profiles/{profile_id}/insurance",
        json={"insurance_type": "health_basic", "company_name": "Santé", "annual_premium": "4800"},
    )

    assert created.status_code == 201
    analysis = client.get(f"/api/profiles/{profile_id}/insurance/analysis").get_json()
    assert analysis["totalAnnualPremium"] == 7200
    assert analysis["totalDeathCapital"] == 100000
    assert analysis["byType"]["protection"] == {"count": 1, "premium": 2400.0}

    contract_id = created.get_json()["data"]["id"]
    assert client.delete(f"/api/insurance/{contract_id}").status_code == 200
    assert client.delete(f"/api/insurance/{contract_id}").status_code == 404
    contracts = client.get(f"/api/profiles/{profile_id}/insurance").get_json()["contracts"]
    assert [c["insurance_type"] for c in contracts] == ["health_basic"]


def test_invalid_insurance_payload_is_400(client, profile_id):
    response = client.post(
        f"/api/profiles/{profile_id}/insurance",
        json={"insurance_type": "pet", "company_name": "Animaux SA", "annual_premium": 100},
    )
    negative = client.post(
        f"/api/profiles/{profile_id}/insurance",
        json={"insurance_type": "life", "company_name": "Vie SA", "annual_premium": -5},
    )

    assert response.status_code == 400
    assert response.get_json()["field"] == "insurance_type"
    assert negative.status_code == 400


def test_third_pillar_analysis_uses_profile_age(client, profile_id):
    client.post(
        f"/api/profiles/{profile_id}/third-pillar",
        json={
            "account_type": "3a_bank",
            "institution_name": "Banque",
            "current_amount": 1000,
            "annual_contribution": 500,
            "return_rate": 2,
        },
    )

    analysis = client.get(f"/api/profiles/{profile_id}/third-pillar/analysis").get_json()
    overridden = client.get(f"/api/profiles/{profile_id}/third-pillar/analysis?currentAge=65").get_json()

    assert analysis["currentAge"] == 63
    assert analysis["totalProjectedAmount"] == pytest.approx(2050.4)
    assert overridden["totalProjectedAmount"] == pytest.approx(1000)


def test_third_pillar_analysis_needs_birth_date(client):
    created = client.post("/api/profiles", json={"first_name": "Luc", "last_name": "Rey"}).get_json()

    response = client.get(f"/api/profiles/{created['data']['id']}/third-pillar/analysis")

    assert response.status_code == 400


def test_lpp_accounts_and_analysis(client, profile_id):
    client.post(
        f"/api/profiles/{profile_id}/lpp",
        json={
            "provider_name": "Caisse de pension",
            "current_retirement_savings": 120000,
            "projected_retirement_rent_at_65": 24000,
            "projected_retirement_rent_at_62": 20000,
            "death_capital": 80000,
        },
    )

    accounts = client.get(f"/api/profiles/{profile_id}/lpp").get_json()["accounts"]
    analysis = client.get(f"/api/profiles/{profile_id}/lpp/analysis").get_json()

    assert accounts[0]["projected_retirement_rent_at_62"] == 20000
    assert analysis["total_accounts"] == 1
    assert analysis["total_monthly_rent_65"] == 2000
    assert analysis["total_death_capital"] == 80000


@pytest.mark.parametrize("query", ["retirementAge=50000", "retirementAge=-1", "currentAge=500"])
def test_third_pillar_analysis_rejects_out_of_range_ages(client, profile_id, query):
    client.post(
        f"/api/profiles/{profile_id}/third-pillar",
        json={"account_type": "3a_bank", "institution_name": "Banque", "current_amount": 1000, "return_rate": 2},
    )

    response = client.get(f"/api/profiles/{profile_id}/third-pillar/analysis?{query}")

    assert response.status_code == 400
    assert "between 0 and 120" in response.get_json()["error"]


def test_update_cannot_move_record_to_another_profile(client, profile_id):
    other = client.post("/api/profiles", json={"first_name": "Luc", "last_name": "Rey"}).get_json()["data"]["id"]
    created = client.post(
        f"/api/profiles/{profile_id}/insurance",
        json={"insurance_type": "life", "company_name": "Vie SA", "annual_premium": 1000},
    ).get_json()["data"]

    moved = client.post(
        f"/api/profiles/{other}/insurance",
        json={"id": created["id"], "insurance_type": "life", "company_name": "Vie SA", "annual_premium": 10},
    )

    assert moved.status_code == 404
    contracts = client.get(f"/api/profiles/{profile_id}/insurance").get_json()["contracts"]
    assert contracts[0]["annual_premium"] == 1000
    assert client.get(f"/api/profiles/{other}/insurance").get_json()["contracts"] == []
