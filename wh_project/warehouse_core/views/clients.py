from .. import services
from ..exceptions import PermissionDenied
from ..models import Client, EntityMembership
from ..services.validation import get_owned, parse_bool, parse_day
from .common import api_view, read_json, respond
from .serializers import client_dict, statement_dict


@api_view(methods=("GET", "POST"))
def client_list(request, company):
    if request.method == "POST":
        client = services.create_client(company, read_json(request))
        return respond("Client created successfully", status=201, client=client_dict(client))

    clients = Client.objects.for_company(company).order_by("name")
    if "active" in request.GET:
        clients = clients.filter(is_active=parse_bool(request.GET["active"]))
    return respond("Clients fetched", clients=[client_dict(c) for c in clients])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def client_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        client = services.update_client(company, pk, read_json(request))
        return respond("Client updated successfully", client=client_dict(client))
    if request.method == "DELETE":
        services.delete_client(company, pk)
        return respond("Client deleted successfully")

    client = get_owned(Client, company, pk, "Client")
    return respond("Client fetched", client=client_dict(client))


@api_view(methods=("GET",))
def client_statement(request, company, pk):
    statement = services.client_statement(
        company, pk,
        start=parse_day(request.GET.get("start"), "start"),
        end=parse_day(request.GET.get("end"), "end"),
    )
    return respond("Statement fetched", statement=statement_dict(statement, "client", client_dict))


def check_fix_allowed(request, data):
    """Reports are open to every member, overwriting balances is for admins."""
    fix = parse_bool(data.get("fix"), default=False)
    if fix and request.role not in EntityMembership.ADMIN_ROLES:
        raise PermissionDenied("Admin role required to fix balances")
    return fix


@api_view(methods=("POST",))
def client_reconcile(request, company, pk):
    data = read_json(request)
    fix = check_fix_allowed(request, data)
    client = get_owned(Client, company, pk, "Client")
    drifts = services.reconcile_entity(client, fix=fix)
    client.refresh_from_db()
    return respond(
        "Balance fixed" if fix and drifts else ("Balance drift found" if drifts else "Balance is consistent"),
        client=client_dict(client),
        drifts=[d.as_dict() for d in drifts],
    )
