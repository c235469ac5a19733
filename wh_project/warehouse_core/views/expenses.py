from .. import services
from ..models import Expense
from ..services.validation import get_owned, parse_day
from .common import api_view, read_json, respond
from .serializers import expense_dict


@api_view(methods=("GET", "POST"))
def expense_list(request, company):
    if request.method == "POST":
        expense = services.create_expense(company, read_json(request))
        return respond("Expense created successfully", status=201, expense=expense_dict(expense))

    expenses = Expense.objects.active(company)
    if request.GET.get("category"):
        expenses = expenses.filter(category=request.GET["category"])
    start = parse_day(request.GET.get("start"), "start")
    end = parse_day(request.GET.get("end"), "end")
    if start:
        expenses = expenses.filter(date__gte=start)
    if end:
        expenses = expenses.filter(date__lte=end)
    return respond("Expenses fetched", expenses=[expense_dict(e) for e in expenses])


@api_view(methods=("GET", "PUT", "PATCH", "DELETE"))
def expense_detail(request, company, pk):
    if request.method in ("PUT", "PATCH"):
        expense = services.update_expense(company, pk, read_json(request))
        return respond("Expense updated successfully", expense=expense_dict(expense))
    if request.method == "DELETE":
        services.delete_expense(company, pk)
        return respond("Expense deleted successfully")

    expense = get_owned(Expense, company, pk, "Expense", queryset=Expense.objects.filter(is_active=True))
    return respond("Expense fetched", expense=expense_dict(expense))
