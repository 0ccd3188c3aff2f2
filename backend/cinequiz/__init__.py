from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
import json
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

SEED_MOVIES = [
    {'id': 22, 'title': 'Pirates of the Caribbean: The Curse of the Black Pearl',
     'poster_path': '/z8onk7LV9Mmw6zKz4hT6pzzvmvl.jpg', 'release_date': '2003-07-09'},
    {'id': 603, 'title': 'The Matrix', 'poster_path': '/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg', 'release_date': '1999-03-30'},
    {'id': 680, 'title': 'Pulp Fiction', 'poster_path': '/d5iIlFn5s0ImszYzBPb8JPIfbXD.jpg', 'release_date': '1994-09-10'},
    {'id': 13, 'title': 'Forrest Gump', 'poster_path': '/arw2vcBveWOVZr6pxd9XTd1TdQa.jpg', 'release_date': '1994-06-23'},
    {'id': 155, 'title': 'The Dark Knight', 'poster_path': '/qJ2tW6WMUDux911r6m7haRef0WH.jpg', 'release_date': '2008-07-16'},
]


def load_movies(entries):
    """Insert or update movies from dicts with title, poster_path and release_date."""
    from cinequiz.models import Movie
    count = 0
    for entry in entries:
        movie = db.session.get(Movie, entry['id']) if entry.get('id') is not None else None
        if movie is None:
            movie = Movie(id=entry.get('id'))
        movie.title = entry['title']
        movie.poster_path = entry.get('poster_path')
        movie.release_date = entry.get('release_date')
        db.session.add(movie)
        count += 1
    db.session.commit()
    return count


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Import and register blueprints here
    from cinequiz.main import main
    flask_app.register_blueprint(main)

    from cinequiz.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # One manager per app so its per-user locks are shared across requests
    from cinequiz.services.games import GameSessionManager
    from cinequiz.services.games.questions import MovieQuestionSource
    from cinequiz.services.games.store import GameStore
    flask_app.extensions['game_manager'] = GameSessionManager(
        MovieQuestionSource(logger=flask_app.logger),
        GameStore(logger=flask_app.logger),
        initial_lives=int(flask_app.config.get('INITIAL_LIVES', 2)),
        logger=flask_app.logger,
    )

    # Flask-Login user loader
    from cinequiz.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Unauthorized. Login required.'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            users = ['testuser1', 'testuser2', 'testuser3']
            for u in users:
                user = User(username=u)
                user.set_password('password')
                db.session.add(user)
            db.session.commit()

            load_movies(SEED_MOVIES)
            click.echo('Database has been reset and seeded!')

    @click.command('load-movies')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def load_movies_command(path):
        """Loads movies from a JSON list into the catalog."""
        with open(path, encoding='utf-8') as fh:
            entries = json.load(fh)
        with flask_app.app_context():
            count = load_movies(entries)
        click.echo(f'Loaded {count} movies.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(load_movies_command)

    return flask_app
