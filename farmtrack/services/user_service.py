import uuid
from werkzeug.security import generate_password_hash, check_password_hash

from farmtrack.database.db import db
from farmtrack.database.models import User
from farmtrack.errors import Conflict


class UserService:

    @staticmethod
    def get_user(user_id):
        return db.session.get(User, user_id)

    @staticmethod
    def register(username, password, name=None):
        username = username.strip()
        if User.query.filter_by(username=username).first():
            raise Conflict('Username already registered. Please login.')

        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=generate_password_hash(password),
            name=name or None,
        )
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def authenticate(username, password):
        """Return the user for valid credentials, else None."""
        user = User.query.filter_by(username=username.strip()).first()
        if not user or not check_password_hash(user.password_hash, password):
            return None
        return user
