from rest_framework.permissions import BasePermission


class IsPayrollStaff(BasePermission):
    """Allows access to admin and accountant roles only"""

    message = "Only admin and accountant roles can access payroll"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, 'is_payroll_staff', False))
