import json
import logging
from functools import wraps

from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.http import JsonResponse

from ..exceptions import (AuthenticationRequired, PermissionDenied,
                          ValidationFailed, WarehouseError)
from ..models import EntityMembership
from ..services.validation import parse_choice, parse_id

logger = logging.getLogger(__name__)


def respond(message, status=200, **data):
    """Every response is {success, message, ...data}."""
    return JsonResponse(
        {"success": status < 400, "message": message, **data},
        status=status,
        encoder=DjangoJSONEncoder,
    )


def _validation_message(exc):
    if hasattr(exc, "message_dict"):
        return "; ".join(
            f"{field}: {' '.join(msgs)}" if field != "__all__" else " ".join(msgs)
            for field, msgs in exc.message_dict.items()
        )
    return " ".join(exc.messages)


def read_json(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed("Malformed JSON body")
    if not isinstance(data, dict):
        raise ValidationFailed("JSON body must be an object")
    return data


def api_view(methods=("GET",), admin_only=False):
    """
    Wrap a JSON view: method check, tenant check, and the single place
    where service exceptions become HTTP responses.
    View functions receive (request, company, ...).
    """

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in methods:
                return respond("Method not allowed", status=405)
            try:
                company = getattr(request, "company", None)
                if company is None:
                    raise AuthenticationRequired()
                if admin_only and getattr(request, "role", None) not in EntityMembership.ADMIN_ROLES:
                    raise PermissionDenied("Admin role required")
                return view(request, company, *args, **kwargs)
            except WarehouseError as exc:
                if exc.status_code >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, exc.message)
                return respond(exc.message, status=exc.status_code, **exc.extra)
            except ValidationError as exc:
                return respond(_validation_message(exc), status=400)
            except Exception:
                # details stay in the server log, the client gets a generic message
                logger.exception("Unhandled error on %s %s", request.method, request.path)
                return respond("Internal server error", status=500)

        return wrapper

    return decorator


def filter_by_params(queryset, request, params):
    """
    Apply ?field=value filters from the query string. *_id params must be
    positive integers, the others one of the model field's choice codes.
    """
    for param in params:
        value = request.GET.get(param)
        if not value:
            continue
        if param.endswith("_id"):
            value = parse_id(value, param)
        else:
            value = parse_choice(value, param, queryset.model._meta.get_field(param).choices)
        queryset = queryset.filter(**{param: value})
    return queryset
