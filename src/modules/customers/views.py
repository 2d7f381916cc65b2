"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into HTTP status codes here
and nowhere else; the view never swallows generic exceptions.

Status mapping:
- malformed id or body, blank names → 400
- future date of birth → 422
- unknown id → 404
- duplicate (first name, last name) on create → 409
- empty collection → 204
"""

from __future__ import annotations

from typing import Any, Dict

from django.urls import reverse
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import BasePermission, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.dtos import CustomerInputDTO
from modules.customers.exceptions import (
    CustomerAlreadyExists,
    CustomerNotFound,
    InvalidCustomer,
    UnprocessableCustomer,
)
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService

NOT_FOUND = {"detail": "Customer not found."}
INVALID_ID = {"detail": "Invalid customer ID."}


def _parse_id(pk: str | None) -> int:
    """Customer ids are positive integers; anything else is a malformed request."""
    if pk is None:
        raise ValueError("missing customer id")
    value = int(pk)
    if value < 1:
        raise ValueError(f"invalid customer id {pk!r}")
    return value


@extend_schema_view(
    list=extend_schema(
        responses={200: CustomerSerializer(many=True), 204: None},
    ),
    retrieve=extend_schema(
        responses={200: CustomerSerializer, 400: None, 404: None},
    ),
    create=extend_schema(
        request=CustomerSerializer,
        responses={
            201: OpenApiResponse(description="Created; see the Location header."),
            400: None,
            409: None,
            422: None,
        },
    ),
    update=extend_schema(request=CustomerSerializer, responses=CustomerSerializer),
    partial_update=extend_schema(
        request=CustomerSerializer, responses=CustomerSerializer
    ),
)
class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.  Deleting requires a staff user.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filterset_class = CustomerFilter
    ordering_fields = ["id", "first_name", "last_name", "date_of_birth"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    admin_actions = {"destroy", "destroy_all"}

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def get_permissions(self) -> list[BasePermission]:
        permissions = super().get_permissions()
        if self.action in self.admin_actions:
            permissions.append(IsAdminUser())
        return permissions

    def get_queryset(self):
        return self._service.list_customers()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/

        An empty result is answered with 204 and no body.
        """
        customers = list(self.filter_queryset(self.get_queryset()))
        if not customers:
            return Response(status=status.HTTP_204_NO_CONTENT)
        serializer = CustomerSerializer(customers, many=True)
        return Response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer_id = _parse_id(pk)
        except ValueError:
            return Response(INVALID_ID, status=status.HTTP_400_BAD_REQUEST)
        try:
            snapshot = self._service.get_customer(customer_id)
        except CustomerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(snapshot.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/

        Answers 201 with an empty body and a ``Location`` header.
        """
        dto, error = self._parse_body(request.data)
        if error is not None:
            return error

        try:
            customer_id = self._service.create_customer(dto)
        except InvalidCustomer as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except UnprocessableCustomer as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        except CustomerAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        location = request.build_absolute_uri(
            reverse("customer-detail", kwargs={"pk": customer_id})
        )
        return Response(
            status=status.HTTP_201_CREATED,
            headers={"Location": location},
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        return self._update(request, pk, partial=False)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self._update(request, pk, partial=True)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            customer_id = _parse_id(pk)
        except ValueError:
            return Response(INVALID_ID, status=status.HTTP_400_BAD_REQUEST)
        try:
            self._service.delete_customer(customer_id)
        except CustomerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def destroy_all(self, request: Request) -> Response:
        """DELETE /api/v1/customers/"""
        self._service.delete_all_customers()
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update(self, request: Request, pk: str | None, partial: bool) -> Response:
        try:
            customer_id = _parse_id(pk)
        except ValueError:
            return Response(INVALID_ID, status=status.HTTP_400_BAD_REQUEST)

        dto, error = self._parse_body(request.data)
        if error is not None:
            return error

        try:
            snapshot = self._service.update_customer(customer_id, dto, partial=partial)
        except CustomerNotFound:
            return Response(NOT_FOUND, status=status.HTTP_404_NOT_FOUND)
        except InvalidCustomer as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except UnprocessableCustomer as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        return Response(snapshot.model_dump(mode="json"))

    @staticmethod
    def _parse_body(data: Any) -> tuple[CustomerInputDTO | None, Response | None]:
        """Coerce the request body into a DTO; wrong JSON types are a 400."""
        if not isinstance(data, dict):
            return None, Response(
                {"detail": "Expected a JSON object."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        payload: Dict[str, Any] = dict(data.items())
        try:
            return CustomerInputDTO.model_validate(payload), None
        except PydanticValidationError as exc:
            return None, Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
