from django.urls import path
from . import views

app_name = 'currencies'

urlpatterns = [
    path('', views.currency_list, name='currency-list'),
    path('default/', views.default_currency, name='currency-default'),
]
