from .. import services
from .common import api_view, respond


@api_view(methods=("POST",), admin_only=True)
def counter_resync(request, company, series):
    value = services.resync_counter(company, series)
    return respond(
        f"Counter {series} resynced",
        series=series,
        value=value,
        next_number=services.format_number(series, value + 1),
    )
