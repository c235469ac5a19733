from .. import services
from ..models import Purchase
from ..services.validation import get_owned
from .common import api_view, filter_by_params, read_json, respond
from .serializers import purchase_dict


@api_view(methods=("GET",))
def purchase_list(request, company):
    purchases = Purchase.objects.for_company(company).prefetch_related("lines")
    purchases = filter_by_params(purchases, request, ("supplier_id", "kind"))
    return respond("Purchases fetched", purchases=[purchase_dict(p) for p in purchases])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def purchase_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        purchase = services.update_purchase(company, pk, read_json(request))
        return respond("Purchase updated successfully", purchase=purchase_dict(purchase))
    if request.method == "DELETE":
        number = services.delete_purchase(company, pk)
        return respond("Purchase deleted successfully", purchase_order_no=number)

    purchase = get_owned(Purchase, company, pk, "Purchase")
    return respond("Purchase fetched", purchase=purchase_dict(purchase))
