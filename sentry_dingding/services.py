import requests
from .constants import DEBUG_MODE, DINGDING_MESSAGE_TITLE, DINGDING_MSGTYPE, DINGDING_TIMEOUT_SECONDS


def build_dingding_message(text, title=DINGDING_MESSAGE_TITLE):
    return {
        "msgtype": DINGDING_MSGTYPE,
        "markdown": {
            "title": title,
            "text": text,
        },
    }


def send_dingding_payload(webhook_url, text, title=DINGDING_MESSAGE_TITLE, timeout=DINGDING_TIMEOUT_SECONDS):
    payload = build_dingding_message(text, title)

    # Status não é verificado: qualquer resposta conta como entregue
    resp = requests.post(
        webhook_url,
        json=payload,
        headers={"Content-Type": "application/json"},
        timeout=timeout,
    )
    print(f"[INFO] DingDing response: {resp.status_code}")
    if DEBUG_MODE:
        print(f"[DEBUG] Response content: {resp.text}")
    return resp
