from cinequiz import db, bcrypt
from flask_login import UserMixin
import json

class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    game = db.relationship('Game', back_populates='user', uselist=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }

class Movie(db.Model):
    __tablename__ = 'movie'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(256), nullable=False)
    poster_path = db.Column(db.String(256), nullable=True)
    release_date = db.Column(db.String(10), nullable=True)  # ISO date, e.g. 2003-07-09

class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    # One game row per user; a new game overwrites the finished one
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False, index=True)
    lives = db.Column(db.Integer, nullable=False)
    combo = db.Column(db.Integer, nullable=False, default=0)
    record = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    current_movie_id = db.Column(db.Integer, db.ForeignKey('movie.id'), nullable=True)
    seen_movie_ids = db.Column(db.Text, nullable=True)  # JSON-encoded list of movie ids
    user = db.relationship('User', back_populates='game')

    @property
    def seen_ids(self):
        try:
            return set(json.loads(self.seen_movie_ids)) if self.seen_movie_ids else set()
        except ValueError:
            return set()

    @seen_ids.setter
    def seen_ids(self, ids):
        self.seen_movie_ids = json.dumps(sorted(ids))
