"""
Payroll System URLs

Mounted under /api/. Literal paths under employees/ are listed before the
employees/<uuid:pk>/ routes of the same shape.
"""
from django.urls import path

from .views import (
    AdjustAdvanceAPIView,
    AdvanceHistoryAPIView,
    AdvanceOverviewAPIView,
    BulkSalaryUploadAPIView,
    EmployeeSalaryListAPIView,
    GenerateMonthlySalariesAPIView,
    GiveAdvanceAPIView,
    PaySalaryAPIView,
    SalaryCreateAPIView,
    SalaryPayablesAPIView,
    SalaryPreviewAPIView,
    SalaryReportAPIView,
    SalaryStatisticsAPIView,
    SalaryTrendsAPIView,
)

urlpatterns = [
    # Salary Routes
    path('employees/salaries', SalaryCreateAPIView.as_view(), name='salary-create'),
    path('employees/salaries/pay', PaySalaryAPIView.as_view(), name='salary-pay'),
    path('employees/salaries/generate-monthly', GenerateMonthlySalariesAPIView.as_view(), name='salary-generate-monthly'),
    path('employees/salaries/bulk-upload', BulkSalaryUploadAPIView.as_view(), name='salary-bulk-upload'),

    # Salary Reporting Routes
    path('employees/reports/salaries', SalaryReportAPIView.as_view(), name='salary-report'),
    path('employees/payables/salaries', SalaryPayablesAPIView.as_view(), name='salary-payables'),
    path('employees/statistics/salaries', SalaryStatisticsAPIView.as_view(), name='salary-statistics'),
    path('employees/trends/salaries', SalaryTrendsAPIView.as_view(), name='salary-trends'),

    # Advance Routes
    path('employees/advances/overview', AdvanceOverviewAPIView.as_view(), name='advance-overview'),

    # Per-employee Routes
    path('employees/<uuid:pk>/salaries', EmployeeSalaryListAPIView.as_view(), name='employee-salaries'),
    path('employees/<uuid:pk>/salary-preview', SalaryPreviewAPIView.as_view(), name='employee-salary-preview'),
    path('employees/<uuid:pk>/advance', GiveAdvanceAPIView.as_view(), name='employee-advance-give'),
    path('employees/<uuid:pk>/advance/adjust', AdjustAdvanceAPIView.as_view(), name='employee-advance-adjust'),
    path('employees/<uuid:pk>/advances', AdvanceHistoryAPIView.as_view(), name='employee-advance-history'),
]
