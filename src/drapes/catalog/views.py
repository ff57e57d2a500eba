"""Public catalog views."""

from decimal import Decimal, InvalidOperation

from django.views.generic import DetailView, ListView

from .models import Category, Product
from .services import SORT_ORDERS, search_products


def _parse_price(value):
    if not value:
        return None
    try:
        price = Decimal(value)
    except InvalidOperation:
        return None
    if not price.is_finite() or price < 0:
        return None
    return price


class ProductListView(ListView):
    """Shop page with category, price range, search and sort filters."""

    model = Product
    template_name = "catalog/product_list.html"
    context_object_name = "products"
    paginate_by = 12

    def get_category(self):
        # Looked up once per request
        if not hasattr(self, "_category"):
            slug = self.request.GET.get("category") or self.kwargs.get("category_slug")
            self._category = (
                Category.objects.filter(slug=slug, is_active=True).first() if slug else None
            )
        return self._category

    def get_queryset(self):
        params = self.request.GET
        return search_products(
            category=self.get_category(),
            min_price=_parse_price(params.get("min_price")),
            max_price=_parse_price(params.get("max_price")),
            query=params.get("q", "").strip(),
            sort=params.get("sort", "newest"),
            in_stock_only=params.get("in_stock") == "1",
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = Category.objects.filter(
            is_active=True, parent__isnull=True
        ).prefetch_related("children")
        context["current_category"] = self.get_category()
        context["sort_options"] = list(SORT_ORDERS)
        context["current_sort"] = self.request.GET.get("sort", "newest")
        return context


class ProductDetailView(DetailView):
    """Product page with its size and color options."""

    model = Product
    template_name = "catalog/product_detail.html"
    context_object_name = "product"
    slug_url_kwarg = "slug"

    def get_queryset(self):
        return Product.objects.active().select_related("category")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        product = self.object
        context["size_options"] = product.size_options.select_related("size")
        context["color_options"] = product.color_options.select_related("color")

        # Related products (same category, excluding current)
        context["related_products"] = (
            Product.objects.active()
            .filter(category=product.category)
            .exclude(pk=product.pk)
            .order_by("-created_at")[:4]
        )
        return context
