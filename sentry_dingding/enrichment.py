from .constants import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_LEVEL,
    DEFAULT_PROJECT,
    DEFAULT_TITLE,
    SHAPE_ACTION,
    SHAPE_EVENT,
)
from .utils import as_dict, as_list, as_text, dig, find_header, format_datetime, normalize_pairs, pick_first_nonempty


def extract_exception(source):
    exception = as_dict(dig(source, 'exception', 'values', 0))
    frames = as_list(dig(exception, 'stacktrace', 'frames'))
    return {
        'exception_type': as_text(exception.get('type')),
        'exception_value': as_text(exception.get('value')),
        'frames': [as_dict(frame) for frame in frames],
    }


def extract_user(user, with_identity=True):
    """with_identity=False mantém apenas IP e localização (formato action)."""
    user = as_dict(user)
    geo = as_dict(user.get('geo'))
    location = ""
    if as_text(geo.get('city')):
        parts = [as_text(geo.get(k)) for k in ('city', 'region', 'country_code')]
        location = ", ".join([p for p in parts if p])
    identity = user if with_identity else {}
    return {
        'user_id': as_text(identity.get('id')),
        'user_email': as_text(identity.get('email')),
        'username': as_text(identity.get('username')),
        'user_ip': as_text(user.get('ip_address')),
        'location': location,
    }


def extract_request(request, with_method=True):
    request = as_dict(request)
    return {
        'request_method': as_text(request.get('method')) if with_method else "",
        'request_url': as_text(request.get('url')),
        'user_agent': find_header(request.get('headers'), 'user-agent'),
    }


def _name_version(context):
    context = as_dict(context)
    name = as_text(context.get('name'))
    if not name:
        return ""
    return " ".join([p for p in [name, as_text(context.get('version'))] if p])


def extract_contexts(contexts):
    contexts = as_dict(contexts)
    return {
        'browser': _name_version(contexts.get('browser')),
        'os': _name_version(contexts.get('os')),
        'device': as_text(as_dict(contexts.get('device')).get('family')),
    }


def _base_fields(shape):
    return {
        'shape': shape,
        'action': "",
        'release': "",
        'browser': "",
        'os': "",
        'device': "",
        'actor_type': "",
        'actor_name': "",
        'details_url': "",
        'issue_id': "",
    }


def extract_event_fields(payload):
    """Plugin legado: metadados no topo e detalhes em payload['event']."""
    payload = as_dict(payload)
    event = as_dict(payload.get('event'))

    message = pick_first_nonempty(event.get('message'), payload.get('message'))
    fields = _base_fields(SHAPE_EVENT)
    fields.update({
        'project': pick_first_nonempty(payload.get('project'), payload.get('project_name')) or DEFAULT_PROJECT,
        'environment': as_text(event.get('environment')) or DEFAULT_ENVIRONMENT,
        'level': pick_first_nonempty(payload.get('level'), event.get('level')) or DEFAULT_LEVEL,
        'datetime': format_datetime(payload.get('datetime') or event.get('datetime')),
        'title': pick_first_nonempty(event.get('title'), message) or DEFAULT_TITLE,
        'message': message,
        'tags': normalize_pairs(event.get('tags')),
        'release': as_text(event.get('release')),
        'details_url': as_text(payload.get('url')),
    })
    fields.update(extract_exception(event))
    fields.update(extract_user(event.get('user')))
    fields.update(extract_request(event.get('request')))
    return fields


def extract_action_fields(payload):
    """Integração do Sentry: action + data.error + actor.

    Retorna None quando data.error não existe.
    """
    payload = as_dict(payload)
    error = dig(payload, 'data', 'error')
    if not isinstance(error, dict):
        return None

    actor = as_dict(payload.get('actor'))
    message = as_text(error.get('message'))
    fields = _base_fields(SHAPE_ACTION)
    fields.update({
        'action': as_text(payload.get('action')),
        'project': as_text(error.get('project')) or DEFAULT_PROJECT,
        'environment': as_text(error.get('environment')) or DEFAULT_ENVIRONMENT,
        'level': as_text(error.get('level')) or DEFAULT_LEVEL,
        'datetime': format_datetime(error.get('datetime')),
        'title': pick_first_nonempty(error.get('title'), message) or DEFAULT_TITLE,
        'message': message,
        'tags': normalize_pairs(error.get('tags')),
        'actor_type': as_text(actor.get('type')),
        'actor_name': as_text(actor.get('name')),
        'details_url': as_text(error.get('web_url')),
        'issue_id': as_text(error.get('issue_id')),
    })
    fields.update(extract_exception(error))
    fields.update(extract_user(error.get('user'), with_identity=False))
    fields.update(extract_request(error.get('request'), with_method=False))
    fields.update(extract_contexts(error.get('contexts')))
    return fields


def extract_alert_fields(payload, shape):
    if shape == SHAPE_EVENT:
        return extract_event_fields(payload)
    return extract_action_fields(payload)
