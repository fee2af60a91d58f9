from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'sellers'

router = SimpleRouter()
router.register(r'', views.SellerViewSet, basename='seller')

urlpatterns = [
    # GET    /api/sellers/        - List sellers
    # POST   /api/sellers/        - Create seller
    # GET    /api/sellers/{id}/   - Get seller
    # PUT    /api/sellers/{id}/   - Update seller (create if missing)
    # DELETE /api/sellers/{id}/   - Delete seller and its purchases
    path('', include(router.urls)),
]
