"""
Root URL configuration

All JSON endpoints are served under /api/. Routes carry no trailing slash
to match the dashboard's API client.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/auth/', include('AuthN.urls')),
    path('api/', include('EmployeeManagement.urls')),
    path('api/', include('PayrollSystem.urls')),
]
