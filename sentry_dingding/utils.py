from datetime import datetime, timezone


def as_dict(value):
    if isinstance(value, dict):
        return value
    return {}


def as_list(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def as_text(value):
    """Converte para str; None, '' e False viram string vazia."""
    if value is None or value is False:
        return ""
    return str(value).strip()


def pick_first_nonempty(*candidates):
    for c in candidates:
        text = as_text(c)
        if text:
            return text
    return ""


def dig(data, *path):
    """Navega em dicts aninhados sem lançar exceção.

    >>> dig({'data': {'error': {'title': 'x'}}}, 'data', 'error', 'title')
    'x'
    """
    current = data
    for key in path:
        if isinstance(key, int):
            items = as_list(current)
            if not -len(items) <= key < len(items):
                return None
            current = items[key]
        else:
            current = as_dict(current).get(key)
        if current is None:
            return None
    return current


def _split_pair(item):
    if isinstance(item, (list, tuple)) and len(item) >= 2:
        return item[0], item[1]
    if isinstance(item, dict) and 'key' in item:
        return item.get('key'), item.get('value')
    return None, None


def normalize_pairs(value):
    """Normaliza tags/headers do Sentry para um dict.

    Aceita mapping ({k: v}), lista de pares ([[k, v], ...]) ou lista de
    objetos ([{'key': k, 'value': v}, ...]). Pares com chave ou valor
    vazio são ignorados.
    """
    if isinstance(value, dict):
        items = value.items()
    else:
        items = [_split_pair(item) for item in as_list(value)]

    result = {}
    for key, val in items:
        if not key or not val:
            continue
        result[str(key)] = val
    return result


def find_header(headers, name):
    wanted = name.lower()
    for key, value in normalize_pairs(headers).items():
        if key.lower() == wanted:
            return as_text(value)
    return ""


def parse_datetime(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    text = as_text(value)
    if not text:
        return None
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_datetime(value=None):
    """Formata no estilo zh-CN (2024/1/15 10:30:00) no fuso local do servidor.

    Valor vazio (None, '', 0) usa o horário atual; valor impossível de
    interpretar ou fora do intervalo é devolvido como veio.
    """
    if not value:
        dt = datetime.now(timezone.utc)
    else:
        dt = parse_datetime(value)
        if dt is None:
            return as_text(value)
    # datetime sem tzinfo é tratado como horário local
    try:
        local = dt.astimezone()
    except (OverflowError, ValueError, OSError):
        return as_text(value)
    return f"{local.year}/{local.month}/{local.day} {local:%H:%M:%S}"
