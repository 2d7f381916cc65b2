import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_authorization_header_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "headers": "Authorization: eyJhbGciOi.abc"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "eyJhbGciOi" not in result["headers"]

    def test_non_string_values_untouched(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "customer.deleted", "customer_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["customer_id"] == 42

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "customer.created", "first_name": "Raja"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["first_name"] == "Raja"
        assert result["event"] == "customer.created"
