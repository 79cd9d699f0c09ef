from sentry_dingding.controller import create_app
from sentry_dingding.constants import APP_PORT, DEBUG_MODE


app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=APP_PORT, debug=DEBUG_MODE)
