"""
Employee Management URLs
"""
from django.urls import path

from .views import EmployeeDetailAPIView, EmployeeListCreateAPIView

urlpatterns = [
    path('employees', EmployeeListCreateAPIView.as_view(), name='employee-list-create'),
    path('employees/<uuid:pk>', EmployeeDetailAPIView.as_view(), name='employee-detail'),
]
