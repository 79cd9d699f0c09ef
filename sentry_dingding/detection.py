from .constants import SHAPE_ACTION, SHAPE_EVENT
from .utils import as_dict, dig


def has_action_error(payload):
    return isinstance(dig(payload, 'data', 'error'), dict)


def is_event_payload(payload):
    return isinstance(as_dict(payload).get('event'), dict)


def detect_payload_shape(payload):
    """Identifica o formato do webhook do Sentry.

    - 'action': integração (action/data.error/actor)
    - 'event': plugin legado de webhook (project/level/url + event)

    Payload sem nenhum dos dois cai em 'action'; o formatter devolve a
    mensagem de fallback nesse caso.
    """
    if has_action_error(payload):
        return SHAPE_ACTION
    if is_event_payload(payload):
        return SHAPE_EVENT
    return SHAPE_ACTION
