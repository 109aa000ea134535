from django.urls import path
from . import views

app_name = 'scans'

urlpatterns = [
    path('single/', views.single_scan, name='single'),
    path('history/', views.ScanHistoryView.as_view(), name='history'),
]
