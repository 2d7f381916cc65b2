from unittest.mock import patch


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        data = client.get("/health").json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_both_caches(self, client):
        data = client.get("/health").json()
        assert data["services"]["cache"]["status"] == "up"
        assert data["services"]["customer_cache"]["status"] == "up"

    def test_health_check_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200

    def test_cache_failure_returns_503(self, client):
        with patch(
            "modules.core.views._check_cache", side_effect=ConnectionError("down")
        ):
            response = client.get("/health")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["customer_cache"] == {"status": "down"}
