from .. import services
from ..models import Purchase, Supplier
from ..services.validation import get_owned, parse_bool, parse_day
from .clients import check_fix_allowed
from .common import api_view, read_json, respond
from .serializers import purchase_dict, statement_dict, supplier_dict


@api_view(methods=("GET", "POST"))
def supplier_list(request, company):
    if request.method == "POST":
        supplier = services.create_supplier(company, read_json(request))
        return respond("Supplier created successfully", status=201, supplier=supplier_dict(supplier))

    suppliers = Supplier.objects.for_company(company).order_by("name")
    if "active" in request.GET:
        suppliers = suppliers.filter(is_active=parse_bool(request.GET["active"]))
    return respond("Suppliers fetched", suppliers=[supplier_dict(s) for s in suppliers])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def supplier_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        supplier = services.update_supplier(company, pk, read_json(request))
        return respond("Supplier updated successfully", supplier=supplier_dict(supplier))
    if request.method == "DELETE":
        services.delete_supplier(company, pk)
        return respond("Supplier deleted successfully")

    supplier = get_owned(Supplier, company, pk, "Supplier")
    return respond("Supplier fetched", supplier=supplier_dict(supplier))


@api_view(methods=("GET", "POST"))
def supplier_goods(request, company, pk):
    if request.method == "POST":
        purchase = services.record_goods_receipt(company, pk, read_json(request))
        return respond("Goods recorded successfully", status=201, purchase=purchase_dict(purchase))

    supplier = get_owned(Supplier, company, pk, "Supplier")
    purchases = Purchase.objects.filter(supplier=supplier, kind="goods_receipt").prefetch_related("lines")
    return respond("Purchases fetched", purchases=[purchase_dict(p) for p in purchases])


@api_view(methods=("GET", "POST"))
def supplier_invoices(request, company, pk):
    if request.method == "POST":
        purchase = services.record_supplier_invoice(company, pk, read_json(request))
        return respond("Invoice recorded successfully", status=201, purchase=purchase_dict(purchase))

    supplier = get_owned(Supplier, company, pk, "Supplier")
    invoices = Purchase.objects.filter(supplier=supplier, kind="invoice").prefetch_related("lines")
    return respond("Invoices fetched", purchases=[purchase_dict(p) for p in invoices])


@api_view(methods=("GET",))
def supplier_statement(request, company, pk):
    statement = services.supplier_statement(
        company, pk,
        start=parse_day(request.GET.get("start"), "start"),
        end=parse_day(request.GET.get("end"), "end"),
    )
    return respond("Statement fetched", statement=statement_dict(statement, "supplier", supplier_dict))


@api_view(methods=("POST",))
def supplier_reconcile(request, company, pk):
    data = read_json(request)
    fix = check_fix_allowed(request, data)
    supplier = get_owned(Supplier, company, pk, "Supplier")
    drifts = services.reconcile_entity(supplier, fix=fix)
    supplier.refresh_from_db()
    return respond(
        "Balance fixed" if fix and drifts else ("Balance drift found" if drifts else "Balance is consistent"),
        supplier=supplier_dict(supplier),
        drifts=[d.as_dict() for d in drifts],
    )
