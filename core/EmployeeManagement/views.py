"""
Employee Management Views
"""
import logging

from django.db.models import Q
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from AuthN.permissions import IsPayrollStaff
from utils.response_utils import api_response, error_response
from .models import Employee
from .serializers import EmployeeSerializer

logger = logging.getLogger(__name__)


class EmployeeListCreateAPIView(APIView):
    """
    GET  /employees  → list (query: search, isActive)
    POST /employees  → create
    """

    permission_classes = [IsAuthenticated, IsPayrollStaff]

    def get(self, request):
        try:
            queryset = Employee.objects.select_related('user').order_by('employee_id')

            is_active = request.query_params.get('isActive')
            if is_active is not None:
                queryset = queryset.filter(is_active=is_active.lower() in ('1', 'true', 'yes'))

            search_query = request.query_params.get('search', '').strip()
            if search_query:
                queryset = queryset.filter(
                    Q(name__icontains=search_query)
                    | Q(employee_id__icontains=search_query)
                    | Q(designation__icontains=search_query)
                    | Q(email__icontains=search_query)
                )

            serializer = EmployeeSerializer(queryset, many=True)
            return api_response(serializer.data, "Employees fetched successfully")
        except Exception as e:
            logger.exception("Error fetching employees")
            return error_response(f"Error fetching employees: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

    def post(self, request):
        serializer = EmployeeSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Validation error", status.HTTP_400_BAD_REQUEST, serializer.errors)
        try:
            employee = serializer.save()
            logger.info(f"Employee {employee.employee_id} created by {request.user.id}")
            return api_response(EmployeeSerializer(employee).data, "Employee created successfully", status.HTTP_201_CREATED)
        except Exception as e:
            logger.exception("Error creating employee")
            return error_response(f"Error creating employee: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)


class EmployeeDetailAPIView(APIView):
    """
    GET    /employees/<id>
    PATCH  /employees/<id>
    DELETE /employees/<id>  → hard delete, or deactivate when payroll history exists
    """

    permission_classes = [IsAuthenticated, IsPayrollStaff]

    def _get_employee(self, pk):
        return Employee.objects.select_related('user').filter(id=pk).first()

    def get(self, request, pk):
        employee = self._get_employee(pk)
        if not employee:
            return error_response("Employee not found", status.HTTP_404_NOT_FOUND)
        return api_response(EmployeeSerializer(employee).data, "Employee fetched successfully")

    def patch(self, request, pk):
        employee = self._get_employee(pk)
        if not employee:
            return error_response("Employee not found", status.HTTP_404_NOT_FOUND)

        serializer = EmployeeSerializer(employee, data=request.data, partial=True)
        if not serializer.is_valid():
            return error_response("Validation error", status.HTTP_400_BAD_REQUEST, serializer.errors)
        try:
            employee = serializer.save()
            logger.info(f"Employee {employee.employee_id} updated by {request.user.id}")
            return api_response(EmployeeSerializer(employee).data, "Employee updated successfully")
        except Exception as e:
            logger.exception(f"Error updating employee {pk}")
            return error_response(f"Error updating employee: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)

    def delete(self, request, pk):
        employee = self._get_employee(pk)
        if not employee:
            return error_response("Employee not found", status.HTTP_404_NOT_FOUND)

        try:
            has_history = employee.salaries.exists() or employee.advance_records.exists()
            if has_history:
                employee.is_active = False
                employee.save(update_fields=['is_active', 'updated_at'])
                logger.info(f"Employee {employee.employee_id} deactivated (payroll history kept)")
                return api_response(
                    EmployeeSerializer(employee).data,
                    "Employee has payroll history and was deactivated instead of deleted",
                )

            employee_code = employee.employee_id
            employee.delete()
            logger.info(f"Employee {employee_code} deleted by {request.user.id}")
            return api_response(None, "Employee deleted successfully")
        except Exception as e:
            logger.exception(f"Error deleting employee {pk}")
            return error_response(f"Error deleting employee: {str(e)}", status.HTTP_500_INTERNAL_SERVER_ERROR)
