"""Tests for the HTTP API."""


class TestHealthCheck:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTurnsEndpoint:
    def test_empty_conversation_asks_for_driver_count(self, client):
        response = client.post("/api/v1/quote-profile/turns", json={"turns": []})

        body = response.json()
        assert response.status_code == 200
        assert body["next_field"] == "number_of_drivers"
        assert body["next_question"] == "How many drivers will be on the policy?"
        assert body["completeness"]["ready_for_quote"] is False

    def test_conversation_scenario(self, client):
        turns = [
            {"role": "user", "text": text}
            for text in ["I'm 35", "2019 Honda Civic", "just me", "1 vehicle", "zip 94105"]
        ]

        response = client.post("/api/v1/quote-profile/turns", json={"turns": turns})

        body = response.json()
        assert response.status_code == 200
        assert body["completeness"]["ready_for_quote"] is True
        assert body["profile"]["vehicles"][0]["model"] == "Civic"
        assert body["next_field"] == "driver_1_experience"
        assert body["summary"].startswith("## Your Quote Profile")
        assert "Ready for quotes:** ✅ Yes" in body["summary"]

    def test_snapshot_round_trip(self, client):
        first = client.post(
            "/api/v1/quote-profile/turns",
            json={"turns": [{"role": "user", "text": "2 drivers"}]},
        ).json()

        second = client.post(
            "/api/v1/quote-profile/turns",
            json={
                "turns": [
                    {"role": "user", "text": "2 drivers"},
                    {"role": "assistant", "text": "How many vehicles?"},
                    {"role": "user", "text": "just one car"},
                ],
                "profile": first["profile"],
            },
        ).json()

        assert second["profile"]["basics"]["driver_count"] == 2
        assert second["profile"]["basics"]["vehicle_count"] == 1
        assert len(second["profile"]["drivers"]) == 2
        assert second["next_field"] == "zip_code"

    def test_broken_snapshot_is_rejected(self, client):
        response = client.post(
            "/api/v1/quote-profile/turns",
            json={
                "turns": [],
                "profile": {"basics": {"vehicle_count": 2}, "vehicles": [{}]},
            },
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "PROFILE_CONTRACT_VIOLATION"

    def test_missing_turns_is_a_validation_error(self, client):
        response = client.post("/api/v1/quote-profile/turns", json={})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestAnalysisEndpoint:
    def test_california_minimum_shortfall(self, client):
        response = client.post(
            "/api/v1/quote-profile/analysis",
            json={
                "coverage": {"insurance_type": "auto", "liability": "10/20/3",
                             "uninsured_motorist": "15/30"},
                "profile": {"basics": {"state": "CA"}},
            },
        )

        analysis = response.json()["analysis"]
        assert response.status_code == 200
        assert [g["id"] for g in analysis["gaps"][:2]] == [
            "state_minimum_bi_person", "state_minimum_pd",
        ]
        assert analysis["health_score"] == 25

    def test_unknown_insurance_type(self, client):
        response = client.post(
            "/api/v1/quote-profile/analysis",
            json={"coverage": {"insurance_type": "boat"}},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_COVERAGE_DOCUMENT"

    def test_scanned_numbers_and_flags(self, client):
        response = client.post(
            "/api/v1/quote-profile/analysis",
            json={"coverage": {"liability": 25, "total_premium": 1200, "collision": "Included"}},
        )

        ids = [g["id"] for g in response.json()["analysis"]["gaps"]]
        assert response.status_code == 200
        assert "premium_savings_opportunity" in ids


class TestStatesEndpoint:
    def test_lists_state_minimums(self, client):
        response = client.get("/api/v1/quote-profile/states")

        states = {s["state"]: s for s in response.json()["states"]}
        assert response.status_code == 200
        assert states["CA"]["liability"] == "15/30/5"
        assert states["FL"]["pip_required"] is True

    def test_state_notes(self, client):
        response = client.get("/api/v1/quote-profile/states")

        states = {s["state"]: s for s in response.json()["states"]}
        assert "no-fault" in states["PA"]["notes"]
        assert states["TX"]["notes"] is None
