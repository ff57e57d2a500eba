"""Core mixins for view access control."""

from django.contrib.auth.mixins import LoginRequiredMixin, UserPassesTestMixin


class CustomerRequiredMixin(LoginRequiredMixin):
    """Authenticated customer access (order history, checkout)."""

    login_url = "/accounts/login/"
    redirect_field_name = "next"


class StaffRequiredMixin(LoginRequiredMixin, UserPassesTestMixin):
    """Back-office views: staff and superusers only."""

    login_url = "/accounts/login/"
    raise_exception = False

    def test_func(self):
        user = self.request.user

        # Superusers always have access
        if user.is_superuser:
            return True

        return user.is_staff

    def handle_no_permission(self):
        # Logged-in customers get a 403, anonymous visitors go to login
        if self.request.user.is_authenticated:
            self.raise_exception = True
        return super().handle_no_permission()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["is_staff_portal"] = True
        return context
