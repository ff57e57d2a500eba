"""Customer profile views."""

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.forms import PasswordChangeForm
from django.shortcuts import redirect
from django.views.generic import FormView, TemplateView, UpdateView

from drapes.core.mixins import CustomerRequiredMixin
from drapes.store.services import get_wishlist

from .forms import ProfileForm


class ProfileView(CustomerRequiredMixin, TemplateView):
    """Profile page with recent orders and the wishlist."""

    template_name = "profile/profile.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        user = self.request.user
        context.update({
            "user": user,
            "recent_orders": user.orders.all()[:5],
            "wishlist": get_wishlist(user),
        })
        return context


class ProfileEditView(CustomerRequiredMixin, UpdateView):
    """Edit contact details and the saved shipping address."""

    template_name = "profile/profile_edit.html"
    form_class = ProfileForm

    def get_object(self, queryset=None):
        return self.request.user

    def form_valid(self, form):
        form.save()
        messages.success(self.request, "Profile updated successfully.")
        return redirect("profile:view")


class PasswordChangeView(CustomerRequiredMixin, FormView):
    """Change password."""

    template_name = "profile/password_change.html"
    form_class = PasswordChangeForm

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["user"] = self.request.user
        return kwargs

    def form_valid(self, form):
        user = form.save()
        update_session_auth_hash(self.request, user)
        messages.success(self.request, "Password changed successfully.")
        return redirect("profile:view")
