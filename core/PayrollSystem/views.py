"""
Payroll System Views

Thin HTTP layer over PayrollSystem.services: validate input, call the
service, shape the envelope. All balance arithmetic lives in the services.
"""
import logging

from django.http import HttpResponse
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from AuthN.permissions import IsPayrollStaff
from utils.pagination_utils import CustomPagination
from utils.response_utils import api_response, error_response
from . import services
from .conf import payroll_setting
from .exceptions import PayrollError
from .reports import XLSX_CONTENT_TYPE, build_salary_report, report_filename
from .serializers import (
    AdjustAdvanceSerializer,
    AdvanceRecordSerializer,
    BulkSalaryEntrySerializer,
    BulkSalaryUploadSerializer,
    CreateSalarySerializer,
    GiveAdvanceSerializer,
    PaySalarySerializer,
    PeriodQuerySerializer,
    PreviewEmployeeSerializer,
    SalaryPaymentSerializer,
    SalarySerializer,
)
from .utils import month_label

logger = logging.getLogger(__name__)


# ==================== HELPER FUNCTIONS ====================

class AdvanceHistoryPagination(CustomPagination):

    def __init__(self):
        self.page_size = payroll_setting('ADVANCE_HISTORY_PAGE_SIZE')
        self.max_page_size = payroll_setting('ADVANCE_HISTORY_MAX_PAGE_SIZE')


def get_idempotency_key(request, validated_data):
    """Body `idempotencyKey` wins over the Idempotency-Key header"""
    return validated_data.get('idempotencyKey') or request.headers.get('Idempotency-Key') or None


def validation_error(serializer):
    return error_response("Validation error", status.HTTP_400_BAD_REQUEST, serializer.errors)


def parse_period(request):
    """
    Returns: ((month, year), None) or (None, error Response)
    """
    serializer = PeriodQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return None, validation_error(serializer)
    return (serializer.validated_data.get('month'), serializer.validated_data.get('year')), None


class PayrollAPIView(APIView):
    permission_classes = [IsAuthenticated, IsPayrollStaff]


# ==================== SALARY VIEWS ====================

class EmployeeSalaryListAPIView(PayrollAPIView):
    """GET /employees/<id>/salaries"""

    def get(self, request, pk):
        try:
            salaries = services.get_employee_salaries(employee_id=pk)
            return api_response(SalarySerializer(salaries, many=True).data, "Salaries fetched successfully")
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Error fetching salaries for employee {pk}")
            return error_response(f"Error fetching salaries: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class SalaryCreateAPIView(PayrollAPIView):
    """POST /employees/salaries"""

    def post(self, request):
        serializer = CreateSalarySerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error(serializer)
        data = serializer.validated_data
        try:
            salary = services.create_salary(
                employee_id=data['employeeId'],
                month=data['month'],
                year=data['year'],
                overtime_hours=data['overtimeHours'],
                bonus=data['bonus'],
                deductions=data['deductions'],
            )
            return api_response(SalarySerializer(salary).data, "Salary created successfully", status.HTTP_201_CREATED)
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error creating salary")
            return error_response(f"Error creating salary: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class PaySalaryAPIView(PayrollAPIView):
    """POST /employees/salaries/pay"""

    def post(self, request):
        serializer = PaySalarySerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error(serializer)
        data = serializer.validated_data
        try:
            result = services.pay_salary(
                employee_id=data['employeeId'],
                month=data['month'],
                year=data['year'],
                paid_date=data['paidDate'],
                advance_deduction=data['advanceDeduction'],
                payment_method=data.get('paymentMethod'),
                reference=data.get('reference'),
                notes=data.get('notes'),
                paid_by=request.user,
                idempotency_key=get_idempotency_key(request, data),
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error paying salary")
            return error_response(f"Error paying salary: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        payment = result['payment']
        employee = result['employee']
        recovery = result['recovery_record']
        response_data = {
            'success': True,
            'salary': SalarySerializer(result['salary']).data,
            'advanceDeduction': {
                'deducted': payment.advance_deducted,
                'previousBalance': result['previous_balance'],
                'newBalance': result['new_balance'],
                'recoveryRecord': AdvanceRecordSerializer(recovery).data if recovery else None,
            },
            'payment': SalaryPaymentSerializer(payment).data,
            'employee': {
                'id': employee.id,
                'name': employee.name,
                'designation': employee.designation,
            },
        }
        message = "Salary payment already recorded" if result['replayed'] else "Salary paid successfully"
        return api_response(response_data, message)


class GenerateMonthlySalariesAPIView(PayrollAPIView):
    """POST /employees/salaries/generate-monthly?month=&year="""

    def post(self, request):
        period, error = parse_period(request)
        if error:
            return error
        month, year = period
        try:
            result = services.generate_monthly_salaries(month=month, year=year)
            summary = result['summary']
            return api_response(
                result,
                f"Generated {summary['created']} salaries for {month_label(result['month'])} {result['year']}"
                f" ({summary['skipped']} skipped, {summary['errors']} errors)",
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error generating monthly salaries")
            return error_response(
                f"Error generating monthly salaries: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR
            )


class BulkSalaryUploadAPIView(PayrollAPIView):
    """
    POST /employees/salaries/bulk-upload

    Rows are validated one by one; an invalid row becomes a row error and
    the remaining rows are still imported.
    """

    def post(self, request):
        serializer = BulkSalaryUploadSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error(serializer)
        data = serializer.validated_data

        entries, invalid_rows = [], []
        for row_number, raw_entry in enumerate(data['entries'], start=1):
            entry_serializer = BulkSalaryEntrySerializer(data=raw_entry)
            if entry_serializer.is_valid():
                entries.append((row_number, entry_serializer.validated_data))
                continue
            reasons = [
                f"{field}: {' '.join(str(m) for m in messages)}"
                for field, messages in entry_serializer.errors.items()
            ]
            invalid_rows.append({
                'row': row_number,
                'employeeName': str(raw_entry.get('employeeName') or ''),
                'reason': '; '.join(reasons),
            })

        try:
            result = services.bulk_upload_salaries(
                month=data['month'],
                year=data['year'],
                entries=entries,
                invalid_rows=invalid_rows,
                created_by=request.user,
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error uploading salary sheet")
            return error_response(f"Error uploading salaries: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        summary = result['summary']
        return api_response(
            result,
            f"Processed {summary['processed']} of {summary['totalRows']} rows",
        )


class SalaryReportAPIView(PayrollAPIView):
    """GET /employees/reports/salaries?month=&year=[&format=xlsx]"""

    def get(self, request):
        period, error = parse_period(request)
        if error:
            return error
        month, year = period
        export_format = request.query_params.get('format')
        try:
            month, year, salaries = services.get_salary_report(month=month, year=year)
            if export_format == 'xlsx':
                response = HttpResponse(build_salary_report(salaries, month, year), content_type=XLSX_CONTENT_TYPE)
                response["Content-Disposition"] = f'attachment; filename="{report_filename(month, year)}"'
                return response
            return api_response(
                {
                    'month': month,
                    'year': year,
                    'monthName': month_label(month),
                    'salaries': SalarySerializer(salaries, many=True).data,
                },
                "Salary report fetched successfully",
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error building salary report")
            return error_response(f"Error fetching salary report: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class SalaryPayablesAPIView(PayrollAPIView):
    """GET /employees/payables/salaries?month=&year="""

    def get(self, request):
        period, error = parse_period(request)
        if error:
            return error
        month, year = period
        try:
            result = services.get_payables(month=month, year=year)
            return api_response(
                {
                    'unpaid': SalarySerializer(result['unpaid'], many=True).data,
                    'paid': SalarySerializer(result['paid'], many=True).data,
                    'month': result['month'],
                    'year': result['year'],
                },
                "Salary payables fetched successfully",
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error fetching salary payables")
            return error_response(f"Error fetching payables: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class SalaryStatisticsAPIView(PayrollAPIView):
    """GET /employees/statistics/salaries?month=&year="""

    def get(self, request):
        period, error = parse_period(request)
        if error:
            return error
        month, year = period
        try:
            return api_response(
                services.get_salary_statistics(month=month, year=year),
                "Salary statistics fetched successfully",
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error fetching salary statistics")
            return error_response(f"Error fetching statistics: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class SalaryTrendsAPIView(PayrollAPIView):
    """GET /employees/trends/salaries?year="""

    def get(self, request):
        period, error = parse_period(request)
        if error:
            return error
        _, year = period
        try:
            return api_response(services.get_monthly_trends(year=year), "Salary trends fetched successfully")
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception("Error fetching salary trends")
            return error_response(f"Error fetching trends: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class SalaryPreviewAPIView(PayrollAPIView):
    """GET /employees/<id>/salary-preview?month=&year="""

    def get(self, request, pk):
        period, error = parse_period(request)
        if error:
            return error
        month, year = period
        try:
            result = services.get_salary_preview(employee_id=pk, month=month, year=year)
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Error loading salary preview for employee {pk}")
            return error_response(
                f"Failed to load salary preview: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return api_response(
            {
                'salary': SalarySerializer(result['salary']).data,
                'employee': PreviewEmployeeSerializer(result['employee']).data,
                'advance': result['advance'],
            },
            "Salary preview fetched successfully",
        )


# ==================== ADVANCE VIEWS ====================

def advance_result_data(result):
    employee = result['employee']
    return {
        'success': True,
        'advance': AdvanceRecordSerializer(result['advance']).data,
        'employee': {
            'id': employee.id,
            'name': employee.name,
            'previousBalance': result['previous_balance'],
            'newBalance': result['new_balance'],
        },
    }


class GiveAdvanceAPIView(PayrollAPIView):
    """POST /employees/<id>/advance"""

    def post(self, request, pk):
        serializer = GiveAdvanceSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error(serializer)
        data = serializer.validated_data
        try:
            result = services.give_advance(
                employee_id=pk,
                amount=data['amount'],
                description=data.get('description'),
                payment_method=data.get('paymentMethod'),
                reference=data.get('reference'),
                created_by=request.user,
                idempotency_key=get_idempotency_key(request, data),
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Error giving advance to employee {pk}")
            return error_response(f"Error giving advance: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        if result['replayed']:
            return api_response(advance_result_data(result), "Advance already recorded")
        return api_response(advance_result_data(result), "Advance given successfully", status.HTTP_201_CREATED)


class AdjustAdvanceAPIView(PayrollAPIView):
    """POST /employees/<id>/advance/adjust"""

    def post(self, request, pk):
        serializer = AdjustAdvanceSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error(serializer)
        data = serializer.validated_data
        try:
            result = services.adjust_advance(
                employee_id=pk,
                amount=data['amount'],
                description=data['description'],
                created_by=request.user,
            )
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Error adjusting advance for employee {pk}")
            return error_response(f"Error adjusting advance: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return api_response(advance_result_data(result), "Advance adjusted successfully", status.HTTP_201_CREATED)


class AdvanceHistoryAPIView(PayrollAPIView):
    """GET /employees/<id>/advances?page=&limit="""

    def get(self, request, pk):
        paginator = AdvanceHistoryPagination()
        try:
            result = services.get_advance_history(employee_id=pk)
            advances = paginator.paginate_queryset(result['advances'], request, view=self)
        except NotFound as e:
            return error_response(str(e.detail), status.HTTP_404_NOT_FOUND)
        except PayrollError as e:
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Error fetching advance history for employee {pk}")
            return error_response(f"Error fetching advance history: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

        employee = result['employee']
        return api_response(
            {
                'employee': {
                    'id': employee.id,
                    'name': employee.name,
                    'advanceBalance': employee.advance_balance,
                },
                'advances': AdvanceRecordSerializer(advances, many=True).data,
                'pagination': paginator.get_paginated_response(),
            },
            "Advance history fetched successfully",
        )


class AdvanceOverviewAPIView(PayrollAPIView):
    """GET /employees/advances/overview"""

    def get(self, request):
        try:
            return api_response(services.get_advance_overview(), "Advance overview fetched successfully")
        except Exception as e:
            logger.exception("Error fetching advance overview")
            return error_response(f"Error fetching advance overview: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)
