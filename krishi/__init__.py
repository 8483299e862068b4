# Flask Application Factory
import logging
import sys
from pathlib import Path

from flask import Flask
from flask_login import LoginManager, current_user
from flask_wtf.csrf import CSRFProtect

from krishi.config import Config, DEV_SECRET_KEY, config as config_by_name
from krishi.models import db, User
from krishi.realtime import ChangeFeed, ALL_TABLES
from krishi.stores import init_stores

login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to access this page.'
login_manager.login_message_category = 'info'

csrf = CSRFProtect()

NAV_LINKS = {
    'farmer': [
        ('Dashboard', 'farmer.dashboard'),
        ('My Questions', 'farmer.questions'),
        ('Weather', 'farmer.weather'),
    ],
    'expert': [
        ('Dashboard', 'expert.dashboard'),
        ('Answer Questions', 'expert.questions'),
    ],
    'vendor': [
        ('Dashboard', 'vendor.dashboard'),
        ('My Warehouses', 'vendor.warehouses'),
    ],
}


@login_manager.user_loader
def load_user(user_id):
    try:
        return db.session.get(User, int(user_id))
    except (TypeError, ValueError):
        return None


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    if app.config.get('LOG_TO_STDOUT'):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s [%(name)s] %(message)s'))
        logging.getLogger('krishi').addHandler(handler)
    logging.getLogger('krishi').setLevel(level)
    app.logger.setLevel(level)


def register_template_helpers(app):
    @app.template_filter('datefmt')
    def datefmt(value, fmt='%b %d, %Y'):
        return value.strftime(fmt) if value else ''

    @app.template_filter('tons')
    def tons(value):
        if value is None:
            return '0'
        value = float(value)
        return f'{value:,.0f}' if value.is_integer() else f'{value:,.1f}'

    @app.context_processor
    def inject_layout():
        links = NAV_LINKS.get(current_user.role, []) if current_user.is_authenticated else []
        return {
            'nav_links': links,
            'poll_seconds': app.config.get('REALTIME_POLL_SECONDS', 10),
            'change_feed': app.extensions['change_feed'],
        }


def create_app(config_class=Config):
    if isinstance(config_class, str):
        config_class = config_by_name[config_class]

    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    if app.config.get('REQUIRE_SECRET_KEY') and app.config['SECRET_KEY'] == DEV_SECRET_KEY:
        raise ValueError('No SECRET_KEY set for production')

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)
    feed = ChangeFeed(app)
    feed.subscribe(ALL_TABLES, lambda change: app.logger.debug(
        'Change %s #%d: %s %s', change.table, change.version, change.event, change.record_id))
    init_stores(app, feed)

    # Create upload directories
    Path(app.config['UPLOAD_FOLDER']).mkdir(parents=True, exist_ok=True)
    Path(app.config['QUESTION_IMAGES_FOLDER']).mkdir(parents=True, exist_ok=True)

    register_template_helpers(app)

    # Create database tables and seed users
    with app.app_context():
        app.logger.info('Initializing database...')
        db.create_all()
        app.logger.info('Database tables created/verified')

        if app.config.get('SEED_DEMO_DATA'):
            from krishi.seed import seed_demo_data
            # Local backend keeps its own sample records on disk
            seed_demo_data(include_records=app.config['STORAGE_BACKEND'] == 'sql')

    # Register blueprints
    from krishi.routes.auth import auth_bp
    from krishi.routes.main import main_bp, page_not_found
    from krishi.routes.farmer import farmer_bp
    from krishi.routes.expert import expert_bp
    from krishi.routes.vendor import vendor_bp
    from krishi.routes.api import api_bp
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(main_bp)
    app.register_blueprint(farmer_bp, url_prefix='/farmer')
    app.register_blueprint(expert_bp, url_prefix='/expert')
    app.register_blueprint(vendor_bp, url_prefix='/vendor')
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_error_handler(404, page_not_found)

    return app
