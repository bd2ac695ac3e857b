# This project was developed with assistance from AI tools.
"""Tests for public API endpoints."""

import pytest

# -- Free-text answer --


def test_calc_answer_happy_path(client):
    response = client.get(
        "/api/public/calc/answer",
        params={"q": "price 900k down 20 percent 6.25 30 years zip 92688"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["county"] == "Orange"
    assert data["tax"] == {"rate": 0.0115, "source": "zip_lookup"}
    assert data["inputs"]["rate_pct"] == 6.25
    assert data["result"]["monthly_tax"] == 690
    assert len(data["result"]["amortization"]) == 30
    assert data["message"].startswith("Estimated monthly payment is $")


def test_calc_answer_reports_missing_fields(client):
    response = client.get(
        "/api/public/calc/answer", params={"q": "price 900k down 20% 30 years 92688"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is False
    assert data["missing"] == ["rate_pct"]
    assert data["result"] is None
    assert "interest rate" in data["message"]


def test_calc_answer_tax_override(client):
    response = client.get(
        "/api/public/calc/answer",
        params={"q": "loan 400k 6.5% 30 years 92688", "taxPct": 1.5},
    )
    data = response.json()
    assert data["tax"]["source"] == "override"
    assert data["result"]["monthly_tax"] == 500


def test_calc_answer_requires_query(client):
    response = client.get("/api/public/calc/answer")
    assert response.status_code == 422
    assert response.json()["title"] == "Unprocessable Entity"


# -- Routed payment --


def test_calc_payment_tokens(client):
    response = client.get("/api/public/calc/payment", params={"q": "400000 at 6.5 30 years"})
    assert response.status_code == 200
    data = response.json()
    assert data["engine_used"] == "tokens"
    assert data["result"]["monthly_pi"] == 2528.27


def test_calc_payment_numeric_params(client):
    response = client.get(
        "/api/public/calc/payment",
        params={"loanAmount": "350k", "annualRatePct": "6.75", "termYears": "30"},
    )
    assert response.status_code == 200
    assert response.json()["engine_used"] == "numeric"


def test_calc_payment_unparseable(client):
    response = client.get("/api/public/calc/payment", params={"q": "hello"})
    assert response.status_code == 400
    data = response.json()
    assert data["status"] == 400
    assert "Try adding" in data["detail"]
    chain = data["extensions"]["fallback_chain"]
    assert [a["engine"] for a in chain] == ["tokens", "context", "numeric"]


def test_calc_payment_rejects_unknown_engine(client):
    response = client.get("/api/public/calc/payment", params={"q": "x", "engine": "magic"})
    assert response.status_code == 422


# -- PITI --


def test_piti_happy_path(client):
    response = client.get(
        "/api/public/piti", params={"loan": 400000, "rate": 6.5, "term": 30, "ins": 100}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["inputs"]["term_months"] == 360
    assert data["tax"]["source"] == "default"
    assert data["result"]["monthly_pi"] == 2528.27
    assert data["result"]["monthly_ins"] == 100


def test_piti_price_tax_base(client):
    response = client.get(
        "/api/public/piti",
        params={
            "loan": 400000,
            "ratePct": 6.5,
            "termMonths": 360,
            "zip": "92688",
            "price": 500000,
            "taxBase": "price",
        },
    )
    data = response.json()
    assert data["inputs"]["tax_base"] == "price"
    assert data["result"]["monthly_tax"] == 479.17


def test_piti_price_base_without_price_uses_loan(client):
    response = client.get(
        "/api/public/piti",
        params={"loan": 400000, "rate": 6.5, "term": 30, "zip": "92688", "taxBase": "price"},
    )
    assert response.json()["inputs"]["tax_base"] == "loan"


def test_piti_mi_above_80_ltv(client):
    response = client.get(
        "/api/public/piti",
        params={"loan": 450000, "rate": 6, "term": 30, "price": 500000, "miPctAnnual": 0.5},
    )
    result = response.json()["result"]
    assert result["monthly_mi"] == 187.5
    assert result["mi_drops_month"] is not None


def test_piti_missing_params(client):
    response = client.get("/api/public/piti", params={"loan": 400000})
    assert response.status_code == 400
    data = response.json()
    assert data["extensions"]["missing"] == ["rate", "term or termMonths"]


@pytest.mark.parametrize(
    "params",
    [
        {"loan": -1, "rate": 6, "term": 30},
        {"loan": 400000, "rate": 6, "termMonths": 0},
        {"loan": 400000, "rate": 6, "term": 30, "zip": "abcde"},
    ],
)
def test_piti_validation(client, params):
    response = client.get("/api/public/piti", params=params)
    assert response.status_code == 422


# -- Scenario --


def test_scenario(client):
    response = client.post(
        "/api/public/scenario",
        json={
            "inputs": {
                "purchase_price": 400000,
                "down_payment_pct": 25,
                "rent_monthly": 3000,
                "vacancy_pct": 5,
                "tax_pct": 1.2,
                "insurance_pct": 0.5,
                "maintenance_pct": 1,
                "percent_unit": "percent",
            },
            "rate_pct": 7,
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["computed"] is True
    assert data["result"]["loan_amount"] == 300000
    assert len(data["result"]["cash_flow_table"]) == 10


def test_scenario_not_computable(client):
    response = client.post("/api/public/scenario", json={})
    assert response.status_code == 200
    data = response.json()
    assert data["computed"] is False
    assert data["result"] is None


def test_scenario_rejects_bad_term(client):
    response = client.post(
        "/api/public/scenario", json={"inputs": {"term_years": 0}, "rate_pct": 6}
    )
    assert response.status_code == 422


# -- Knowledge / market --


def test_knowledge(client):
    response = client.get("/api/public/knowledge", params={"zip": "92688"})
    assert response.status_code == 200
    data = response.json()
    assert data["county"] == "Orange"
    assert data["tax_rate"] == 0.0115
    assert data["loan_limits"]["one_unit"] == 1150000


def test_knowledge_unmapped_zip(client):
    response = client.get("/api/public/knowledge", params={"zip": "00000"})
    assert response.status_code == 200
    assert response.json()["county"] is None


def test_knowledge_bad_zip(client):
    response = client.get("/api/public/knowledge", params={"zip": "9268"})
    assert response.status_code == 422


def test_market(client):
    response = client.get("/api/public/market")
    assert response.status_code == 200
    assert response.json()["source"] == "stub"


def test_market_unavailable(client, monkeypatch):
    from homerates.core.config import settings

    monkeypatch.setattr(settings, "MARKET_MORT30_AVG", None)
    response = client.get("/api/public/market")
    assert response.status_code == 404
    assert response.json()["detail"] == "Market snapshot unavailable"


def test_calc_answer_percent_after_loan_keyword(client):
    response = client.get("/api/public/calc/answer", params={"q": "$500k loan 6.5% 30 years"})
    data = response.json()
    assert data["ok"] is True
    assert data["inputs"]["loan_amount"] == 500000
    assert data["inputs"]["rate_pct"] == 6.5


def test_calc_payment_non_finite_param(client):
    response = client.get(
        "/api/public/calc/payment",
        params={
            "engine": "numeric",
            "loanAmount": "400000",
            "rate": "6.5",
            "term": "30",
            "hoaPerMonth": "inf",
        },
    )
    assert response.status_code == 200
    assert response.json()["result"]["monthly_hoa"] == 0
