from django.urls import path
from . import views

app_name = 'coaches'

urlpatterns = [
    path('', views.coaches_view, name='list'),
    path('<int:pk>', views.coach_detail_view, name='detail'),
]
