from django.apps import AppConfig


class CustomersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.customers"
    label = "customers"

    def ready(self) -> None:
        from modules.customers.events import CustomerDeleted
        from modules.customers.handlers import customer_deleted_handler
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(CustomerDeleted, customer_deleted_handler)
