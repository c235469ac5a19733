from .. import services
from ..models import Product
from ..services.validation import get_owned, parse_bool, require
from .common import api_view, read_json, respond
from .serializers import product_dict


@api_view(methods=("GET", "POST"))
def product_list(request, company):
    if request.method == "POST":
        product = services.create_product(company, read_json(request))
        return respond("Product created successfully", status=201, product=product_dict(product))

    products = Product.objects.for_company(company).order_by("name")
    if "active" in request.GET:
        products = products.filter(is_active=parse_bool(request.GET["active"]))
    if request.GET.get("category"):
        products = products.filter(category=request.GET["category"])
    if request.GET.get("search"):
        products = products.filter(name__icontains=request.GET["search"])
    return respond("Products fetched", products=[product_dict(p) for p in products])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def product_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        product = services.update_product(company, pk, read_json(request))
        return respond("Product updated successfully", product=product_dict(product))
    if request.method == "DELETE":
        services.delete_product(company, pk)
        return respond("Product deleted successfully")

    product = get_owned(Product, company, pk, "Product")
    return respond("Product fetched", product=product_dict(product))


@api_view(methods=("POST", "PATCH"))
def product_stock(request, company, pk):
    data = read_json(request)
    require(data, "quantity")
    product = services.adjust_stock(company, pk, data["quantity"], data.get("operation") or "set")
    return respond("Stock updated successfully", product=product_dict(product))


@api_view(methods=("GET",))
def product_low_stock(request, company):
    products = services.low_stock_products(company)
    return respond("Low stock products fetched", products=[product_dict(p) for p in products])
