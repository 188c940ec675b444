from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('', views.home, name='home'),
    path('document/', views.create_document, name='document'),
    path('document/<int:pk>/download/', views.download_document, name='download'),
]
