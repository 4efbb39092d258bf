from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from quizrace.config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from quizrace.errors import QuizError

    @flask_app.errorhandler(QuizError)
    def handle_quiz_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    from quizrace.auth import auth
    flask_app.register_blueprint(auth, url_prefix='/api/auth')

    from quizrace.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    from quizrace.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    from quizrace.api.question_sets import question_sets
    flask_app.register_blueprint(question_sets, url_prefix='/api/question-sets')

    from quizrace.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from quizrace.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Must be logged in'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            user = User(username='host')
            user.set_password('password')
            db.session.add(user)
            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('question-sets')
    def question_sets_command():
        """Lists the question sets visible without signing in."""
        from quizrace.services.catalog import list_question_sets
        with flask_app.app_context():
            for entry in list_question_sets(None):
                click.echo(f"{entry['id']}\t{entry['question_count']}\t{entry['name']}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(question_sets_command)

    return flask_app
