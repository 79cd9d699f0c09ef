from .constants import FALLBACK_MESSAGE, IMPORTANT_TAGS, MESSAGE_HEADING, SHAPE_ACTION, STACK_FRAMES_LIMIT
from .detection import detect_payload_shape
from .enrichment import extract_alert_fields
from .utils import as_text


def build_heading_block(fields):
    return [MESSAGE_HEADING]


def build_basic_info_block(fields):
    lines = []
    if fields['shape'] == SHAPE_ACTION and fields['action']:
        lines.append(f"**操作**: `{fields['action']}`")
    lines.append(f"**项目**: `{fields['project']}`")
    lines.append(f"**环境**: `{fields['environment']}`")
    lines.append(f"**级别**: `{fields['level'].upper()}`")
    lines.append(f"**时间**: `{fields['datetime']}`")
    lines.append(f"**错误**: `{fields['title']}`")
    return lines


def build_message_block(fields):
    message = fields['message']
    if message and message != fields['title']:
        return [f"**消息**: `{message}`"]
    return None


def build_exception_block(fields):
    if not (fields['exception_type'] or fields['exception_value']):
        return None
    lines = ["**异常详情**:"]
    if fields['exception_type']:
        lines.append(f"- 类型: `{fields['exception_type']}`")
    if fields['exception_value']:
        lines.append(f"- 值: `{fields['exception_value']}`")
    return lines


def build_user_block(fields):
    entries = [
        ("ID", fields['user_id']),
        ("邮箱", fields['user_email']),
        ("用户名", fields['username']),
        ("IP", fields['user_ip']),
        ("位置", fields['location']),
    ]
    lines = [f"- {label}: `{value}`" for label, value in entries if value]
    if not lines:
        return None
    return ["**用户信息**:"] + lines


def build_request_block(fields):
    entries = [
        ("方法", fields['request_method']),
        ("URL", fields['request_url']),
        ("User-Agent", fields['user_agent']),
    ]
    lines = [f"- {label}: `{value}`" for label, value in entries if value]
    if not lines:
        return None
    return ["**请求信息**:"] + lines


def build_device_block(fields):
    entries = [
        ("浏览器", fields['browser']),
        ("操作系统", fields['os']),
        ("设备", fields['device']),
    ]
    lines = [f"- {label}: `{value}`" for label, value in entries if value]
    if not lines:
        return None
    return ["**设备信息**:"] + lines


def build_tags_block(fields):
    lines = [
        f"- {key}: `{as_text(value)}`"
        for key, value in fields['tags'].items()
        if key in IMPORTANT_TAGS
    ]
    if not lines:
        return None
    return ["**标签**:"] + lines


def build_release_block(fields):
    if fields['release']:
        return [f"**Release**: `{fields['release']}`"]
    return None


def format_frame(frame, show_in_app=False):
    filename = as_text(frame.get('filename')) or 'unknown'
    function = as_text(frame.get('function')) or 'anonymous'
    lineno = as_text(frame.get('lineno') or '') or '?'
    line = f"- `{filename}:{lineno}` in `{function}`"
    if show_in_app:
        line += " (应用内)" if frame.get('in_app') else " (外部)"
    return line


def build_stacktrace_block(fields):
    frames = fields['frames']
    if not frames:
        return None
    # últimos N frames, na ordem original
    show_in_app = fields['shape'] == SHAPE_ACTION
    lines = ["**堆栈跟踪**:"]
    lines.extend(format_frame(frame, show_in_app) for frame in frames[-STACK_FRAMES_LIMIT:])
    return lines


def build_actor_block(fields):
    if fields['actor_type'] and fields['actor_name']:
        return [f"**触发者**: `{fields['actor_name']}` ({fields['actor_type']})"]
    return None


def build_details_link(fields):
    if fields['details_url']:
        return f"**[查看详情]({fields['details_url']})**"
    if fields['shape'] == SHAPE_ACTION and fields['issue_id']:
        return f"**Issue ID**: `{fields['issue_id']}`"
    return ""


# Ordem dos blocos na mensagem; cada builder devolve linhas ou None
BLOCK_BUILDERS = [
    ('heading', build_heading_block),
    ('basic_info', build_basic_info_block),
    ('message', build_message_block),
    ('exception', build_exception_block),
    ('user', build_user_block),
    ('request', build_request_block),
    ('device', build_device_block),
    ('tags', build_tags_block),
    ('release', build_release_block),
    ('stacktrace', build_stacktrace_block),
    ('actor', build_actor_block),
]


def render_blocks(fields):
    parts = []
    for _name, builder in BLOCK_BUILDERS:
        lines = builder(fields)
        if lines:
            parts.append("\n".join(lines) + "\n\n")
    parts.append(build_details_link(fields))
    return "".join(parts)


def format_sentry_message(payload):
    """Converte o webhook do Sentry no markdown enviado ao DingDing.

    Nunca lança exceção por campo ausente: blocos sem dados são omitidos.
    """
    shape = detect_payload_shape(payload)
    fields = extract_alert_fields(payload, shape)
    if fields is None:
        return FALLBACK_MESSAGE
    return render_blocks(fields)
