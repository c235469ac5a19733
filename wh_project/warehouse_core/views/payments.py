from .. import services
from ..models import Payment
from ..services.validation import get_owned
from .common import api_view, filter_by_params, read_json, respond
from .serializers import payment_dict


@api_view(methods=("GET", "POST"))
def payment_list(request, company):
    if request.method == "POST":
        payment = services.create_payment(company, read_json(request))
        return respond("Payment recorded successfully", status=201, payment=payment_dict(payment))

    payments = Payment.objects.for_company(company)
    payments = filter_by_params(payments, request, ("client_id", "supplier_id"))
    return respond("Payments fetched", payments=[payment_dict(p) for p in payments])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def payment_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        payment = services.update_payment(company, pk, read_json(request))
        return respond("Payment updated successfully", payment=payment_dict(payment))
    if request.method == "DELETE":
        payment_no = services.delete_payment(company, pk)
        return respond("Payment deleted successfully", payment_no=payment_no)

    payment = get_owned(Payment, company, pk, "Payment")
    return respond("Payment fetched", payment=payment_dict(payment))
