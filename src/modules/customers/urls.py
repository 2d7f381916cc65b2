"""Customer URL configuration.

Routes are declared explicitly instead of through a router because the
collection route also accepts ``DELETE`` (delete all customers), and the
detail route must accept any path segment so that a malformed id reaches
the view and is answered with 400 rather than 404.
"""

from __future__ import annotations

from django.urls import path

from modules.customers.views import CustomerViewSet

customer_list = CustomerViewSet.as_view(
    {"get": "list", "post": "create", "delete": "destroy_all"}
)
customer_detail = CustomerViewSet.as_view(
    {
        "get": "retrieve",
        "put": "update",
        "patch": "partial_update",
        "delete": "destroy",
    }
)

urlpatterns = [
    path("customers/", customer_list, name="customer-list"),
    path("customers/<str:pk>/", customer_detail, name="customer-detail"),
]
