from ...domain.entities import User
from ..errors import AuthenticationError
from .register_user import IUserRepository, IPasswordHasher, normalize_email


class AuthenticateUser:
    """Resolve basic-auth credentials to a user.

    Every failure raises ``AuthenticationError`` carrying the reason for the
    server log. The client gets the same generic 401 whatever went wrong.
    """

    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, email_address: str, password: str) -> User:
        email = normalize_email(email_address)
        found = self.repo.get_with_password_hash(email)
        if found is None:
            self.hasher.dummy_verify()
            raise AuthenticationError(f"User not found for username: {email}")
        user, password_hash = found
        if not self.hasher.verify(password, password_hash):
            raise AuthenticationError(f"Authentication failure for username: {email}")
        return user
