from django.apps import AppConfig


class EmployeemanagementConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'EmployeeManagement'
    verbose_name = 'Employee Management'
