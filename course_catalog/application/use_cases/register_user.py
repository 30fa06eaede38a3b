from ...domain.entities import User
from ..errors import ValidationError

DUPLICATE_EMAIL_MESSAGE = 'An account with that "emailAddress" already exists'


class DuplicateEmail(Exception):
    """Raised by a repository when the unique email constraint rejects an insert."""


class IUserRepository:
    def get_by_email(self, email: str) -> User | None: ...
    def get_with_password_hash(self, email: str) -> tuple[User, str] | None: ...
    def create(self, first_name: str, last_name: str, email_address: str, password_hash: str) -> User: ...

class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...
    def dummy_verify(self) -> bool: ...


def normalize_email(email: str) -> str:
    return email.strip().lower()


class RegisterUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, first_name: str, last_name: str, email_address: str, password: str) -> User:
        email = normalize_email(email_address)
        if self.repo.get_by_email(email):
            raise ValidationError([DUPLICATE_EMAIL_MESSAGE])
        pwd_hash = self.hasher.hash(password)
        try:
            return self.repo.create(first_name.strip(), last_name.strip(), email, pwd_hash)
        except DuplicateEmail:
            # lost a race with a concurrent signup for the same address
            raise ValidationError([DUPLICATE_EMAIL_MESSAGE])
