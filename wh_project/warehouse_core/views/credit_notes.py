from .. import services
from ..models import CreditNote
from ..services.validation import get_owned, parse_bool, require
from .common import api_view, filter_by_params, read_json, respond
from .serializers import credit_note_dict


@api_view(methods=("GET", "POST"))
def credit_note_list(request, company):
    if request.method == "POST":
        note = services.create_credit_note(company, read_json(request))
        return respond("Credit note created successfully", status=201, credit_note=credit_note_dict(note))

    if parse_bool(request.GET.get("include_deleted"), default=False):
        notes = CreditNote.objects.for_company(company)
    else:
        notes = CreditNote.objects.live(company)
    notes = filter_by_params(notes, request, ("client_id", "order_id", "kind", "status"))
    notes = notes.prefetch_related("lines")
    return respond("Credit notes fetched", credit_notes=[credit_note_dict(n) for n in notes])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def credit_note_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        note = services.update_credit_note(company, pk, read_json(request))
        return respond("Credit note updated successfully", credit_note=credit_note_dict(note))
    if request.method == "DELETE":
        note = services.delete_credit_note(company, pk)
        return respond("Credit note deleted successfully", credit_note=credit_note_dict(note))

    note = get_owned(CreditNote, company, pk, "Credit note")
    return respond("Credit note fetched", credit_note=credit_note_dict(note))


@api_view(methods=("PUT", "PATCH", "POST"))
def credit_note_status(request, company, pk):
    data = read_json(request)
    require(data, "status")
    note = services.set_credit_note_status(company, pk, data["status"])
    return respond("Credit note status updated", credit_note=credit_note_dict(note))
