"""Dashboard and report API views.

Read-only endpoints over the order ledger.  Store failures surface as 503
with a ``{"detail": ...}`` body, like the write endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Tuple

import structlog
from django.db import DatabaseError
from django.http import HttpResponse
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.errors import validation_detail
from modules.core.pagination import StandardResultsSetPagination
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.reports.dtos import DateRangeDTO
from modules.reports.exceptions import NoReportData, UnknownBucket
from modules.reports.pdf import (
    build_report_rows,
    build_summary_rows,
    render_summary_report,
    report_filename,
)
from modules.reports.serializers import DashboardSerializer, ReportTotalsSerializer
from modules.reports.services import ReportService, default_report_range

logger = structlog.get_logger(__name__)

FETCH_FAILED = "Failed to fetch orders."


def _service() -> ReportService:
    return ReportService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
    )


def _parse_range(request: Request) -> DateRangeDTO:
    params = request.query_params
    return DateRangeDTO(
        start_date=params.get("start_date") or None,
        end_date=params.get("end_date") or None,
    )


def _report_range(dto: DateRangeDTO) -> Tuple[date, date]:
    if dto.start_date is None:
        start, today = default_report_range()
        return start, dto.end_date or today
    return dto.start_date, dto.upper


def _bad_request(detail: str) -> Response:
    return Response({"detail": detail}, status=status.HTTP_400_BAD_REQUEST)


def _unavailable() -> Response:
    return Response(
        {"detail": FETCH_FAILED}, status=status.HTTP_503_SERVICE_UNAVAILABLE
    )


class DashboardView(APIView):
    """GET /api/v1/dashboard/?start_date=&end_date="""

    def get(self, request: Request) -> Response:
        try:
            dto = _parse_range(request)
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        service = _service()
        try:
            stats = service.dashboard(dto.start_date, dto.end_date)
            names = service.customer_names()
        except DatabaseError:
            logger.exception("dashboard.fetch_failed")
            return _unavailable()

        data = DashboardSerializer(stats, context={"customer_names": names}).data
        return Response(data)


class DashboardOrdersView(APIView):
    """GET /api/v1/dashboard/orders/?bucket=

    ``bucket`` is a status value, ``payments`` or ``outstanding``.
    """

    pagination_class = StandardResultsSetPagination

    def get(self, request: Request) -> Response:
        bucket: Optional[str] = request.query_params.get("bucket")
        if not bucket:
            return _bad_request("Query parameter 'bucket' is required.")
        try:
            dto = _parse_range(request)
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        service = _service()
        try:
            orders = service.bucket(bucket, dto.start_date, dto.end_date)
            names = service.customer_names()
        except UnknownBucket as exc:
            return _bad_request(str(exc))
        except DatabaseError:
            logger.exception("dashboard.fetch_failed", bucket=bucket)
            return _unavailable()

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(orders, request, view=self)
        serializer = OrderSerializer(page, many=True, context={"customer_names": names})
        return paginator.get_paginated_response(serializer.data)


class ReportSummaryView(APIView):
    """GET /api/v1/reports/summary/?start_date=&end_date=

    Defaults to the first of the current month through today.
    """

    def get(self, request: Request) -> Response:
        try:
            start, end = _report_range(_parse_range(request))
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        try:
            summary = _service().summary(start, end)
        except DatabaseError:
            logger.exception("report.fetch_failed")
            return _unavailable()

        context = {"customer_names": summary.customer_names}
        return Response(
            {
                "start_date": summary.start_date,
                "end_date": summary.end_date,
                "summary": ReportTotalsSerializer(summary.stats).data,
                "orders": OrderSerializer(
                    summary.orders, many=True, context=context
                ).data,
            }
        )


class ReportPdfView(APIView):
    """GET /api/v1/reports/summary/pdf/?start_date=&end_date="""

    def get(self, request: Request) -> HttpResponse:
        try:
            start, end = _report_range(_parse_range(request))
        except PydanticValidationError as exc:
            return _bad_request(validation_detail(exc))

        try:
            summary = _service().summary_for_pdf(start, end)
        except NoReportData as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("report.fetch_failed")
            return _unavailable()

        pdf = render_summary_report(
            build_summary_rows(summary.stats),
            build_report_rows(summary.orders, summary.customer_names),
            summary.start_date,
            summary.end_date,
        )
        logger.info(
            "report.rendered",
            start_date=str(start),
            end_date=str(end),
            size=len(pdf),
        )

        response = HttpResponse(pdf, content_type="application/pdf")
        response["Content-Disposition"] = (
            f'attachment; filename="{report_filename(start, end)}"'
        )
        return response
