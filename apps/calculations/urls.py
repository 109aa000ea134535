from django.urls import path
from . import views

app_name = 'calculations'

urlpatterns = [
    # history/ must stay ahead of the <uuid> routes
    path('history/', views.CalculationHistoryView.as_view(), name='history'),
    path('start/', views.start, name='start'),
    path('<uuid:session_id>/add/', views.add, name='add'),
    path('<uuid:session_id>/finish/', views.finish, name='finish'),
    path('<uuid:session_id>/', views.detail, name='detail'),
]
