"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; store failures surface as 503.
"""

from __future__ import annotations

from typing import Any, Dict

import structlog
from django.db import DatabaseError
from django.http import HttpResponse
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.errors import validation_detail
from modules.core.identity import current_actor
from modules.core.pagination import StandardResultsSetPagination
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    InvalidAdvanceAmount,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.ledger import search_orders, sort_recent_first
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import OrderService
from modules.reports.pdf import invoice_filename, render_invoice

logger = structlog.get_logger(__name__)

ORDER_FIELDS = (
    "customer_id",
    "delivery_date",
    "products",
    "total_value",
    "status",
    "advance_amount",
    "special_instructions",
)


def _not_found() -> Response:
    return Response(
        {"detail": "Order not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


def _bad_request(detail: str) -> Response:
    return Response({"detail": detail}, status=status.HTTP_400_BAD_REQUEST)


def _unavailable(message: str) -> Response:
    return Response({"detail": message}, status=status.HTTP_503_SERVICE_UNAVAILABLE)


def _present_fields(data: Any) -> Dict[str, Any]:
    return {field: data[field] for field in ORDER_FIELDS if field in data}


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = StandardResultsSetPagination

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._orders = OrderDjangoRepository()
        self._service = OrderService(
            order_repository=self._orders,
            customer_repository=CustomerDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Define escopos de throttling por ação."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return self._orders.queryset()

    def _render(self, order: Order) -> Dict[str, Any]:
        context = {"customer_names": self._service.customer_names()}
        return OrderSerializer(order, context=context).data

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        try:
            dto = CreateOrderDTO(**_present_fields(request.data))
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        try:
            order = self._service.create_order(dto, actor=current_actor(request.user))
            body = self._render(order)
        except CustomerNotFound:
            return Response(
                {"detail": "Customer not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidAdvanceAmount as exc:
            return _bad_request(str(exc))
        except DatabaseError:
            logger.exception("order.save_failed")
            return _unavailable("Failed to save order.")

        return Response(body, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        ``status``, ``customer`` and the date range are applied by
        ``OrderFilter``; ``search`` matches display id or customer name.
        Results are most recent first and paginated.
        """
        queryset = self.filter_queryset(self.get_queryset())
        try:
            orders = list(queryset)
            names = self._service.customer_names()
        except DatabaseError:
            logger.exception("order.fetch_failed")
            return _unavailable("Failed to fetch orders.")

        orders = sort_recent_first(
            search_orders(orders, request.query_params.get("search"), names)
        )
        page = self.paginate_queryset(orders)
        serializer = OrderSerializer(page, many=True, context={"customer_names": names})
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
            body = self._render(order)
        except OrderNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("order.fetch_failed", order_id=pk)
            return _unavailable("Failed to fetch orders.")
        return Response(body)

    # ------------------------------------------------------------------
    # Update / Destroy
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/orders/{pk}/

        Only the fields present in the body are changed.  Any status may
        follow any other.
        """
        try:
            dto = UpdateOrderDTO(**_present_fields(request.data))
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        try:
            order = self._service.update_order(
                pk, dto, actor=current_actor(request.user)
            )
            body = self._render(order)
        except OrderNotFound:
            return _not_found()
        except CustomerNotFound:
            return Response(
                {"detail": "Customer not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        except InvalidAdvanceAmount as exc:
            return _bad_request(str(exc))
        except DatabaseError:
            logger.exception("order.save_failed", order_id=pk)
            return _unavailable("Failed to save order.")

        return Response(body)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete_order(pk, actor=current_actor(request.user))
        except OrderNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("order.delete_failed", order_id=pk)
            return _unavailable("Failed to delete order.")
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Invoice
    # ------------------------------------------------------------------

    @action(detail=True, methods=["get"])
    def invoice(self, request: Request, pk: str | None = None) -> HttpResponse:
        """GET /api/v1/orders/{pk}/invoice/

        Renders a PDF invoice.  A deleted customer prints as "Unknown".
        """
        try:
            order = self._service.get_order(pk)
            customer = self._service.get_customer_for(order)
        except OrderNotFound:
            return _not_found()
        except DatabaseError:
            logger.exception("order.fetch_failed", order_id=pk)
            return _unavailable("Failed to fetch orders.")

        pdf = render_invoice(order, customer)
        logger.info("order.invoice_rendered", order_id=str(order.id), size=len(pdf))

        response = HttpResponse(pdf, content_type="application/pdf")
        response["Content-Disposition"] = (
            f'attachment; filename="{invoice_filename(order)}"'
        )
        return response
