from django.apps import AppConfig


class PayrollsystemConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'PayrollSystem'
    verbose_name = 'Payroll System'
