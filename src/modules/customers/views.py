"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; store failures surface as 503.
"""

from __future__ import annotations

import structlog
from django.db import DatabaseError
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.errors import validation_detail
from modules.core.identity import current_actor
from modules.core.pagination import StandardResultsSetPagination
from modules.customers.dtos import CreateCustomerDTO, UpdateCustomerDTO
from modules.customers.exceptions import CustomerNotFound
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService
from modules.orders.ledger import search_customers

logger = structlog.get_logger(__name__)

CUSTOMER_FIELDS = ("full_name", "phone", "email", "address", "preferences")


def _not_found() -> Response:
    return Response(
        {"detail": "Customer not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


def _unavailable(message: str) -> Response:
    return Response({"detail": message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = CustomerSerializer
    pagination_class = StandardResultsSetPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/?search=

        Most recent first; ``search`` matches name, phone or email.
        """
        try:
            customers = self._service.list_customers()
        except DatabaseError:
            logger.exception("customer.fetch_failed")
            return _unavailable("Failed to fetch customers.")

        customers = search_customers(customers, request.query_params.get("search"))
        page = self.paginate_queryset(customers)
        serializer = CustomerSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except CustomerNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("customer.fetch_failed", customer_id=pk)
            return _unavailable("Failed to fetch customers.")
        return Response(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        data = request.data

        try:
            dto = CreateCustomerDTO(
                full_name=data.get("full_name", ""),
                phone=data.get("phone", ""),
                email=data.get("email") or None,
                address=data.get("address", ""),
                preferences=data.get("preferences") or "",
            )
        except PydanticValidationError as exc:
            return Response(
                {"detail": validation_detail(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            customer = self._service.create_customer(
                dto, actor=current_actor(request.user)
            )
        except DatabaseError:
            logger.exception("customer.save_failed")
            return _unavailable("Failed to save customer.")

        out = CustomerSerializer(customer)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/customers/{pk}/

        Only the fields present in the body are changed.
        """
        data = request.data
        try:
            dto = UpdateCustomerDTO(
                **{field: data[field] for field in CUSTOMER_FIELDS if field in data}
            )
        except PydanticValidationError as exc:
            return Response(
                {"detail": validation_detail(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            customer = self._service.update_customer(
                pk, dto, actor=current_actor(request.user)
            )
        except CustomerNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("customer.save_failed", customer_id=pk)
            return _unavailable("Failed to save customer.")

        return Response(CustomerSerializer(customer).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/customers/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk, actor=current_actor(request.user))
        except CustomerNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("customer.delete_failed", customer_id=pk)
            return _unavailable("Failed to delete customer.")
        return Response(status=status.HTTP_204_NO_CONTENT)
