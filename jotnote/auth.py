# -*- coding: utf-8 -*-
"""jotnote.auth
A minimal user registry with signed, expiring tokens.

License: MIT

Users are held in memory only and have nothing to do with notes. This is a
stub: passwords are salted SHA-256 hashes and tokens are HS256 JSON Web
Tokens carrying the username ('sub') and an expiry ('exp').
"""
import hashlib
import hmac
import os
import secrets
from datetime import datetime, timedelta, timezone

import jwt
from dotenv import find_dotenv, load_dotenv

SECRET_ENV = "JOTNOTE_SECRET"
TOKEN_ALGORITHM = "HS256"
TOKEN_TTL = 3600


class AuthError(Exception):
    """Raised for failed registration, login or token checks."""


def hash_password(password, salt=None):
    """Hash a password with a random salt.

    Args:
        password (str): the plain text password.
        salt (str):     hex salt, generated when not given.

    Returns:
        hashed (str):   'salt$hexdigest'.

    """
    salt = salt or secrets.token_hex(16)
    digest = hashlib.sha256(f"{salt}{password}".encode("utf-8")).hexdigest()
    return f"{salt}${digest}"


def verify_password(password, hashed):
    """Check a plain text password against a stored hash."""
    salt, _, _ = hashed.partition("$")
    return hmac.compare_digest(hash_password(password, salt), hashed)


class Auth():
    """Registers users and issues tokens.

    Attributes:
        secret (str):       token signing secret.
        token_ttl (int):    token lifetime in seconds.
        users (list):       registered users (dicts).

    """
    def __init__(self, secret=None, token_ttl=TOKEN_TTL):
        """Initializes an Auth() object."""
        load_dotenv(find_dotenv(usecwd=True))
        self.secret = (secret or os.environ.get(SECRET_ENV)
                       or secrets.token_hex(32))
        self.token_ttl = token_ttl
        self.users = []

    def _find_user(self, username):
        for user in self.users:
            if user['username'] == username:
                return user
        return None

    def register(self, username, password):
        """Add a user.

        Args:
            username (str): the new user's name.
            password (str): the new user's password.

        """
        if not username or not password:
            raise AuthError("Username and password are required")
        if self._find_user(username):
            raise AuthError(f"User '{username}' already exists")
        self.users.append({
            "username": username,
            "password": hash_password(password)
        })

    def login(self, username, password):
        """Check credentials and issue a token.

        Args:
            username (str): the user's name.
            password (str): the user's password.

        Returns:
            token (str):    a signed token valid for token_ttl seconds.

        """
        user = self._find_user(username)
        if not user:
            raise AuthError("User not found")
        if not verify_password(password, user['password']):
            raise AuthError("Invalid password")
        expiry = datetime.now(tz=timezone.utc) + timedelta(
            seconds=self.token_ttl)
        return jwt.encode(
            {"sub": username, "exp": expiry},
            self.secret,
            algorithm=TOKEN_ALGORITHM)

    def authenticate_token(self, token):
        """Guard a request with a token.

        Args:
            token (str):    the token presented with the request.

        Returns:
            username (str): the user the token was issued to.

        """
        if not token:
            raise AuthError("Access denied")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["exp", "sub"]})
        # ExpiredSignatureError is an InvalidTokenError
        except jwt.InvalidTokenError:
            raise AuthError("Invalid token") from None
        return payload['sub']
