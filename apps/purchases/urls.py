from django.urls import path
from . import views

app_name = 'purchases'

urlpatterns = [
    # GET  /api/purchases/               - List purchases (filterable)
    path('', views.purchase_list, name='purchase-list'),

    # Cart for the selected seller (per user)
    path('cart/', views.cart_state, name='cart'),
    path('cart/select/', views.cart_select, name='cart-select'),
    path('cart/change/', views.cart_change, name='cart-change'),
    path('cart/set/', views.cart_set, name='cart-set'),
    path('cart/clear/', views.cart_clear, name='cart-clear'),
    path('cart/save/', views.cart_save, name='cart-save'),
]
