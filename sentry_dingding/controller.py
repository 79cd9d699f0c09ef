from flask import Flask, request
import json

from .constants import CORS_HEADERS, DEBUG_MODE, DINGDING_WEBHOOK_URL, RESPONSE_MESSAGES
from .formatters import format_sentry_message
from .services import send_dingding_payload

WEBHOOK_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_app(webhook_url=None):
    """Cria o app Flask do proxy Sentry -> DingDing.

    webhook_url: URL do robô do DingDing; None usa DINGDING_WEBHOOK_URL do ambiente.
    """
    app = Flask(__name__)
    app.config['DINGDING_WEBHOOK_URL'] = DINGDING_WEBHOOK_URL if webhook_url is None else webhook_url

    @app.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return {'error': RESPONSE_MESSAGES['method_not_allowed']}, 405

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': 'sentry-dingding-proxy'}, 200

    # O path não importa: qualquer rota recebe o webhook
    @app.route('/', defaults={'path': ''}, methods=WEBHOOK_METHODS)
    @app.route('/<path:path>', methods=WEBHOOK_METHODS)
    def sentry_webhook(path):
        if request.method == 'OPTIONS':
            return '', 200

        if request.method != 'POST':
            return {'error': RESPONSE_MESSAGES['method_not_allowed']}, 405

        try:
            # JSON inválido cai no except abaixo (500)
            sentry_data = json.loads(request.get_data(as_text=True))
            dingding_webhook_url = app.config.get('DINGDING_WEBHOOK_URL')

            if not dingding_webhook_url:
                print("[ERROR] DINGDING_WEBHOOK_URL environment variable is not set")
                return {'error': RESPONSE_MESSAGES['not_configured']}, 500

            print(f"[INFO] Payload recebido do Sentry: {json.dumps(sentry_data, indent=2, ensure_ascii=False)}")

            text = format_sentry_message(sentry_data)
            print(f"[INFO] Mensagem para o DingDing:\n{text}")

            send_dingding_payload(dingding_webhook_url, text)

            return {'success': True, 'message': RESPONSE_MESSAGES['success']}, 200
        except Exception as e:
            print(f"[ERROR] Error processing webhook: {e}")
            if DEBUG_MODE:
                print(f"[DEBUG] Raw body: {request.get_data(as_text=True)[:2000]}")
            return {'error': RESPONSE_MESSAGES['failed'], 'details': str(e)}, 500

    return app
