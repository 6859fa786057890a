from django.urls import path

from .views import LoginView, MeView, RefreshTokenView

urlpatterns = [
    path('login', LoginView.as_view(), name='login'),
    path('refresh', RefreshTokenView.as_view(), name='token-refresh'),
    path('me', MeView.as_view(), name='me'),
]
