"""
Main Application Module (Application Factory)
"""

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix  # Needed behind the hosting proxy
from config import Config

from .core.errors import ConfigurationError
from .core.extensions import csrf, limiter
from .core.logger import get_logger
from .core.webhook import WebhookClient

logger = get_logger(__name__)

def create_app(config_class=Config):
    """
    Creates and configures an instance of the Flask application.
    """

    app = Flask(__name__,
                instance_relative_config=True,
                static_folder='static',
                template_folder='templates')

    # === HTTPS BEHIND A PROXY ===
    # Makes Flask trust the X-Forwarded-* headers so generated URLs use 'https://'
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Loads the configuration
    app.config.from_object(config_class)

    # 2. Initializes the extensions
    csrf.init_app(app)
    limiter.init_app(app)

    # 3. Webhook client + in-flight guard, shared by the submit route
    client = WebhookClient(app.config.get('REGISTRATION_WEBHOOK_URL'),
                           timeout=app.config['WEBHOOK_TIMEOUT'])
    try:
        client.check_configuration()
        app.config['WEBHOOK_CONFIG_ERROR'] = None
    except ConfigurationError as e:
        # Not fatal to the process: the page shows the admin message and submit stays disabled
        logger.critical(f"Webhook not configured, submissions are disabled: {e}")
        app.config['WEBHOOK_CONFIG_ERROR'] = str(e)

    from .registration.services import SubmissionGuard
    app.extensions['registration_webhook'] = client
    app.extensions['submission_guard'] = SubmissionGuard()

    if app.config.get('CORS_ALLOWED_ORIGINS'):
        # Enforced by the receiving webhook, recorded here for the operators
        logger.info(f"Webhook CORS origins (advisory): {app.config['CORS_ALLOWED_ORIGINS']}")

    # 4. Blueprints
    from .registration import registration_bp
    app.register_blueprint(registration_bp, url_prefix='/')

    # 5. Health Check route
    @app.route("/health")
    def health_check():
        return "Registration server is up!", 200

    return app
