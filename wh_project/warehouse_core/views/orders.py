from .. import services
from ..models import Order
from ..services.validation import get_owned, require
from .common import api_view, filter_by_params, read_json, respond
from .serializers import order_dict


@api_view(methods=("GET", "POST"))
def order_list(request, company):
    if request.method == "POST":
        order = services.create_order(company, read_json(request))
        return respond("Order created successfully", status=201, order=order_dict(order))

    orders = Order.objects.for_company(company).prefetch_related("lines")
    orders = filter_by_params(orders, request, ("status", "invoice_type", "client_id"))
    return respond("Orders fetched", orders=[order_dict(o) for o in orders])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def order_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        order = services.update_order(company, pk, read_json(request))
        return respond("Order updated successfully", order=order_dict(order))
    if request.method == "DELETE":
        order_no = services.delete_order(company, pk)
        return respond("Order deleted successfully", order_no=order_no)

    order = get_owned(Order, company, pk, "Order")
    return respond("Order fetched", order=order_dict(order))


@api_view(methods=("PUT", "PATCH", "POST"))
def order_status(request, company, pk):
    data = read_json(request)
    require(data, "status")
    order = services.set_order_status(company, pk, data["status"])
    return respond("Order status updated", order=order_dict(order))
