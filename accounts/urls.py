"""
URLs for accounts app
"""
from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

app_name = 'accounts'

urlpatterns = [
    path('login', views.login_view, name='login'),
    path('me', views.me_view, name='me'),
    path('token/refresh', TokenRefreshView.as_view(), name='token-refresh'),
]
