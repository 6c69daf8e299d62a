from django.urls import re_path
from .views import CartListView, CartDetailView, CartCheckoutView

# Trailing slash is optional on every route
urlpatterns = [
    re_path(r"^carts/?$", CartListView.as_view(), name="api-carts-list"),
    re_path(r"^carts/(?P<cart_id>\d+)/?$", CartDetailView.as_view(), name="api-carts-detail"),
    re_path(
        r"^carts/(?P<cart_id>\d+)/checkout/?$",
        CartCheckoutView.as_view(),
        name="api-carts-checkout",
    ),
]
