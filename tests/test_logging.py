import json
import logging

import structlog


class TestStructuredLogging:
    def test_service_events_reach_stdlib_logging(self, caplog):
        logger = structlog.get_logger("modules.customers.services")
        with caplog.at_level(logging.INFO):
            logger.info("customer.created", customer_id=7)
        assert any("customer.created" in r.getMessage() for r in caplog.records)

    def test_json_formatter_masks_secrets(self):
        from django.conf import settings

        formatter_config = settings.LOGGING["formatters"]["json"]
        formatter = formatter_config["()"](
            processors=formatter_config["processors"],
            foreign_pre_chain=formatter_config.get("foreign_pre_chain"),
        )
        record = logging.LogRecord(
            name="modules.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="login attempt password=hunter2",
            args=(),
            exc_info=None,
        )

        output = json.loads(formatter.format(record))

        assert "hunter2" not in output["event"]
        assert "***MASKED***" in output["event"]
        assert output["level"] == "info"
