"""Dashboard and report URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.reports.views import (
    DashboardOrdersView,
    DashboardView,
    ReportPdfView,
    ReportSummaryView,
)

urlpatterns = [
    path("dashboard/", DashboardView.as_view(), name="dashboard"),
    path("dashboard/orders/", DashboardOrdersView.as_view(), name="dashboard-orders"),
    path("reports/summary/", ReportSummaryView.as_view(), name="report-summary"),
    path("reports/summary/pdf/", ReportPdfView.as_view(), name="report-summary-pdf"),
]
