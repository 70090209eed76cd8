from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from taxcore.api.app import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestStateRoutes:
    def test_california_return(self, client):
        resp = client.post(
            "/api/v1/state-returns/ca",
            json={"federal_return": {"agi": "55363", "state_withheld": "1000"}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["state_code"] == "CA"
        assert body["filing_status"] == "single"
        assert body["deduction_type"] == "standard"
        assert Decimal(body["state_tax"]) == Decimal("1623.02")
        assert Decimal(body["state_owed"]) == Decimal("623.02")
        assert body["form_data"]["form_number"] == "Form 540"

    def test_new_york_with_state_data(self, client):
        resp = client.post(
            "/api/v1/state-returns/NY",
            json={
                "federal_return": {
                    "agi": "40000",
                    "filing_status": "married_filing_jointly",
                    "earned_income": "40000",
                    "eitc": "1000",
                    "state_withheld": "900",
                },
                "state_data": {
                    "out_of_state_muni_bond_interest": "200",
                    "in_state_muni_bond_interest": "500",
                    "public_employee_pension": "1000",
                    "pension_income": "30000",
                    "qualifying_children": 2,
                },
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert Decimal(body["state_agi"]) == Decimal("20700")
        assert Decimal(body["state_credits"]) == Decimal("960")
        assert Decimal(body["state_refund"]) == Decimal("900")

    def test_no_income_tax_state(self, client):
        resp = client.post(
            "/api/v1/state-returns/WA", json={"federal_return": {"agi": "90000"}}
        )
        body = resp.json()
        assert body["has_income_tax"] is False
        assert body["message"] == "WA does not have a state income tax"
        assert body["form_data"] is None

    def test_bad_filing_status(self, client):
        resp = client.post(
            "/api/v1/state-returns/CA",
            json={"federal_return": {"agi": "1000", "filing_status": "widowed"}},
        )
        assert resp.status_code == 400

    def test_required_returns(self, client):
        resp = client.post(
            "/api/v1/state-returns/required",
            json={"income_by_state": {"CA": "25000", "NY": "3000", "TX": "100000"}},
        )
        assert resp.status_code == 200
        assert [r["state_code"] for r in resp.json()] == ["CA"]

    def test_list_states(self, client):
        states = client.get("/api/v1/states").json()
        assert len(states) == 51
        assert states[0]["name"] == "Alabama"

    def test_list_no_income_tax_states(self, client):
        states = client.get("/api/v1/states", params={"no_income_tax": "true"}).json()
        assert len(states) == 9
        assert states[0]["name"] == "Alaska"
        assert all(s["has_income_tax"] is False for s in states)

    def test_get_state(self, client):
        body = client.get("/api/v1/states/ca").json()
        assert body["code"] == "CA"
        assert len(body["brackets"]) == 9
        assert body["brackets"][-1]["upper"] is None
        assert Decimal(body["standard_deductions"]["single"]) == Decimal("5363")

    def test_unknown_state_404(self, client):
        assert client.get("/api/v1/states/ZZ").status_code == 404

    def test_compare(self, client):
        resp = client.post(
            "/api/v1/state-tax/compare",
            json={"taxable_income": "50000", "states": ["IL", "CA", "TX"]},
        )
        body = resp.json()
        assert [s["state_code"] for s in body] == ["TX", "CA", "IL"]
        assert Decimal(body[2]["effective_rate"]) == Decimal("4.95")
        assert body[2]["is_flat"] is True

    def test_compare_rejects_negative_income(self, client):
        resp = client.post("/api/v1/state-tax/compare", json={"taxable_income": "-1"})
        assert resp.status_code == 422


MACHINE = {
    "name": "CNC machine",
    "cost_basis": "100000",
    "date_placed_in_service": "2024-05-15",
    "recovery_period": "5",
    "section_179_elected": True,
    "section_179_amount": "30000",
    "bonus_elected": True,
}


class TestDepreciationRoutes:
    def test_asset(self, client):
        resp = client.post("/api/v1/depreciation/asset", json={"asset": MACHINE})
        assert resp.status_code == 200
        body = resp.json()
        assert body["method"] == "MACRS"
        assert Decimal(body["current_year_depreciation"]) == Decimal("77600")
        assert len(body["schedule"]) == 6
        assert Decimal(body["schedule"][0]["total_first_year"]) == Decimal("77600")

    def test_asset_straight_line(self, client):
        asset = {
            "cost_basis": "10000",
            "salvage_value": "1000",
            "date_placed_in_service": "2024-01-10",
            "recovery_period": "5",
            "method": "straight-line",
        }
        body = client.post(
            "/api/v1/depreciation/asset", json={"asset": asset, "year_in_service": 2}
        ).json()
        assert Decimal(body["regular_depreciation"]) == Decimal("1800")

    def test_unknown_method(self, client):
        asset = dict(MACHINE, method="declining-balance")
        resp = client.post("/api/v1/depreciation/asset", json={"asset": asset})
        assert resp.status_code == 400

    def test_invalid_asset(self, client):
        asset = dict(MACHINE, business_use_percent="120")
        resp = client.post("/api/v1/depreciation/asset", json={"asset": asset})
        assert resp.status_code == 400

    def test_portfolio(self, client):
        computer = {
            "name": "Workstation",
            "cost_basis": "10000",
            "date_placed_in_service": "2024-03-01",
            "asset_type": "computers",
        }
        body = client.post(
            "/api/v1/depreciation/portfolio",
            json={"assets": [computer, MACHINE], "tax_year": 2024},
        ).json()
        assert body["asset_count"] == 2
        assert Decimal(body["total_depreciation"]) == Decimal("79600")
        assert body["details"][0]["asset_name"] == "Workstation"

    def test_section_179(self, client):
        asset = dict(
            MACHINE, cost_basis="1300000", section_179_amount="1300000", bonus_elected=False
        )
        body = client.post(
            "/api/v1/depreciation/section-179",
            json={"assets": [asset], "business_income": "1000000"},
        ).json()
        assert body["is_valid"] is False
        assert len(body["issues"]) == 2
        assert Decimal(body["allowed_section_179"]) == Decimal("1000000")

    def test_mid_quarter(self, client):
        q4 = dict(MACHINE, cost_basis="45000", date_placed_in_service="2024-11-03")
        q1 = dict(MACHINE, cost_basis="55000", date_placed_in_service="2024-02-01")
        body = client.post(
            "/api/v1/depreciation/mid-quarter", json={"assets": [q4, q1]}
        ).json()
        assert body["requires_mid_quarter"] is True
        assert body["q4_percentage"] == 45
