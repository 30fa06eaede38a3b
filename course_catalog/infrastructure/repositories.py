from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from .models import UserORM, CourseORM
from ..domain.entities import User, Course
from ..application.use_cases.register_user import IUserRepository, DuplicateEmail
from ..application.use_cases.course_ownership import ICourseRepository

COURSE_FIELDS = ("title", "description", "estimated_time", "materials_needed")

def user_to_domain(u: UserORM) -> User:
    return User(id=u.id, first_name=u.first_name, last_name=u.last_name, email_address=u.email_address)

def course_to_domain(c: CourseORM, owner: UserORM | None = None) -> Course:
    return Course(
        id=c.id,
        title=c.title,
        description=c.description,
        user_id=c.user_id,
        estimated_time=c.estimated_time,
        materials_needed=c.materials_needed,
        owner=user_to_domain(owner) if owner is not None else None,
    )

class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_email(self, email: str) -> User | None:
        row = self.db.query(UserORM).filter(UserORM.email_address == email).first()
        return user_to_domain(row) if row else None

    def get_with_password_hash(self, email: str) -> tuple[User, str] | None:
        row = self.db.query(UserORM).filter(UserORM.email_address == email).first()
        return (user_to_domain(row), row.password_hash) if row else None

    def create(self, first_name: str, last_name: str, email_address: str, password_hash: str) -> User:
        row = UserORM(first_name=first_name, last_name=last_name,
                      email_address=email_address, password_hash=password_hash)
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmail(email_address) from e
        self.db.refresh(row)
        return user_to_domain(row)

class CourseRepository(ICourseRepository):
    def __init__(self, db: Session): self.db = db

    def _with_owner(self):
        return select(CourseORM, UserORM).join(UserORM, CourseORM.user_id == UserORM.id)

    def list_with_owners(self) -> list[Course]:
        rows = self.db.execute(self._with_owner().order_by(CourseORM.id)).all()
        return [course_to_domain(c, u) for c, u in rows]

    def get_with_owner(self, course_id: int) -> Course | None:
        row = self.db.execute(self._with_owner().where(CourseORM.id == course_id)).first()
        return course_to_domain(row[0], row[1]) if row else None

    def get(self, course_id: int) -> Course | None:
        row = self.db.get(CourseORM, course_id)
        return course_to_domain(row) if row else None

    def create(self, user_id: int, title: str, description: str,
               estimated_time: str | None = None, materials_needed: str | None = None) -> Course:
        row = CourseORM(user_id=user_id, title=title, description=description,
                        estimated_time=estimated_time, materials_needed=materials_needed)
        self.db.add(row); self.db.commit(); self.db.refresh(row)
        return course_to_domain(row)

    def update(self, course_id: int, **changes) -> None:
        unknown = set(changes) - set(COURSE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown course fields: {sorted(unknown)}")
        if not changes:
            return
        self.db.execute(update(CourseORM).where(CourseORM.id == course_id).values(**changes))
        self.db.commit()

    def delete(self, course_id: int) -> None:
        self.db.execute(delete(CourseORM).where(CourseORM.id == course_id))
        self.db.commit()
