from ...domain.entities import Course, User
from ..errors import AuthorizationError, NotFoundError


class ICourseRepository:
    def list_with_owners(self) -> list[Course]: ...
    def get_with_owner(self, course_id: int) -> Course | None: ...
    def get(self, course_id: int) -> Course | None: ...
    def create(self, user_id: int, title: str, description: str,
               estimated_time: str | None = None, materials_needed: str | None = None) -> Course: ...
    def update(self, course_id: int, **changes) -> None: ...
    def delete(self, course_id: int) -> None: ...


def ensure_owner(course: Course | None, user: User) -> Course:
    if course is None:
        raise NotFoundError()
    if course.user_id != user.id:
        raise AuthorizationError()
    return course


class LoadOwnedCourse:
    """Fetch a course for mutation by ``user``. Not cached between requests."""

    def __init__(self, repo: ICourseRepository):
        self.repo = repo

    def execute(self, course_id: int, user: User) -> Course:
        return ensure_owner(self.repo.get(course_id), user)
