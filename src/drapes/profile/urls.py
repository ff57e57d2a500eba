"""Customer profile URL patterns."""

from django.urls import path

from . import views

app_name = "profile"

urlpatterns = [
    path("", views.ProfileView.as_view(), name="view"),
    path("edit/", views.ProfileEditView.as_view(), name="edit"),
    path("password/", views.PasswordChangeView.as_view(), name="password-change"),
]
