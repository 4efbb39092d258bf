from quizrace import db, bcrypt
from flask_login import UserMixin
import json

SESSION_WAITING = 'waiting'
SESSION_ACTIVE = 'active'
SESSION_ENDED = 'ended'
SESSION_STATUSES = (SESSION_WAITING, SESSION_ACTIVE, SESSION_ENDED)

# Signed range of BigInteger columns and integer primary keys
BIGINT_MIN = -2 ** 63
BIGINT_MAX = 2 ** 63 - 1
PLAYER_NAME_LEN = 64


def is_bigint(value) -> bool:
    """True for a real int (not bool) that fits a signed 64-bit column."""
    return isinstance(value, int) and not isinstance(value, bool) and BIGINT_MIN <= value <= BIGINT_MAX


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class QuestionSet(db.Model):
    """A user-owned list of (question, answer) pairs."""
    __tablename__ = 'question_set'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    questions_json = db.Column(db.Text, nullable=False, default='[]')
    is_public = db.Column(db.Boolean, nullable=False, default=False)

    @property
    def questions(self):
        return json.loads(self.questions_json or '[]')

    @questions.setter
    def questions(self, value):
        self.questions_json = json.dumps(list(value))

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'description': self.description,
            'questions': self.questions,
            'is_public': self.is_public,
        }


class QuizSession(db.Model):
    __tablename__ = 'quiz_session'
    id = db.Column(db.Integer, primary_key=True)
    status = db.Column(db.String(16), nullable=False, default=SESSION_WAITING)  # waiting, active, ended
    # Snapshot of the question set taken at creation; never rewritten
    questions_json = db.Column(db.Text, nullable=False)
    room_code = db.Column(db.String(6), unique=True, index=True, nullable=True)
    question_set_id = db.Column(db.String(64), nullable=True)

    @property
    def questions(self):
        return json.loads(self.questions_json or '[]')

    @property
    def total_questions(self):
        return len(self.questions)

    def to_dict(self):
        return {
            'id': self.id,
            'status': self.status,
            'questions': self.questions,
            'room_code': self.room_code,
            'question_set_id': self.question_set_id,
        }


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey('quiz_session.id'), nullable=False, index=True)
    name = db.Column(db.String(PLAYER_NAME_LEN), nullable=False)
    joined_at = db.Column(db.BigInteger, nullable=False)  # epoch milliseconds

    def to_dict(self):
        return {
            'id': self.id,
            'session_id': self.session_id,
            'name': self.name,
            'joined_at': self.joined_at,
        }


class Answer(db.Model):
    """One submission. Rows are only ever inserted."""
    __tablename__ = 'answer'
    __table_args__ = (
        db.Index('ix_answer_session_player', 'session_id', 'player_id'),
    )
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.Integer, db.ForeignKey('quiz_session.id'), nullable=False)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    question_index = db.Column(db.Integer, nullable=False)
    value = db.Column(db.BigInteger, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False)
    submitted_at = db.Column(db.BigInteger, nullable=False)  # epoch milliseconds

    def to_dict(self):
        return {
            'id': self.id,
            'session_id': self.session_id,
            'player_id': self.player_id,
            'question_index': self.question_index,
            'value': self.value,
            'is_correct': self.is_correct,
            'submitted_at': self.submitted_at,
        }
