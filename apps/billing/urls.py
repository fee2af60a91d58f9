from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    # POST /api/billing/generate/     - Build a bill for week/month/custom
    # POST /api/billing/mark-billed/  - Commit the last generated bill
    path('generate/', views.generate_bill, name='generate'),
    path('mark-billed/', views.mark_billed, name='mark-billed'),
]
