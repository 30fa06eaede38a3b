from passlib.context import CryptContext

pwd = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__truncate_error=False,
)

class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)
    def verify(self, plain: str, hashed: str) -> bool: return pwd.verify(plain, hashed)

    def dummy_verify(self) -> bool:
        """Burn the same time as a real verify when there is no hash to check."""
        return pwd.dummy_verify()
