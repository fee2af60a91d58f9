from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Totals
    path('header/', views.header_stats, name='header'),
    path('overview/', views.bills_overview, name='overview'),

    # Seller rankings
    path('sellers/top/', views.top_sellers, name='top-sellers'),
    path('sellers/unbilled/', views.unbilled_by_seller, name='unbilled-by-seller'),

    # Dashboard
    path('dashboard/', views.dashboard, name='dashboard'),
]
