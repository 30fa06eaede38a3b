import structlog
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ....application.errors import NotFoundError
from ....domain.entities import Course, User
from ....infrastructure.db import get_db
from ....infrastructure.metrics import db_queries_total
from ....infrastructure.repositories import CourseRepository
from ..authz import get_current_user, require_course_owner
from ..schemas import CourseOut, CourseWrite
from ..validation import validated_body, required

router = APIRouter(prefix="/courses", tags=["courses"])
logger = structlog.get_logger()

COURSE_RULES = [
    required("title"),
    required("description"),
]

@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    db_queries_total.inc()
    return [CourseOut.model_validate(c) for c in CourseRepository(db).list_with_owners()]

@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: int, db: Session = Depends(get_db)):
    db_queries_total.inc()
    course = CourseRepository(db).get_with_owner(course_id)
    if course is None: raise NotFoundError()
    return CourseOut.model_validate(course)

# --- Authenticated mutations. Dependency order is the pipeline order:
# body validation, then credentials, then ownership.

@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_course(payload: CourseWrite = Depends(validated_body(CourseWrite, COURSE_RULES)),
                  user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    db_queries_total.inc()
    course = CourseRepository(db).create(
        user_id=user.id,
        title=payload.title,
        description=payload.description,
        estimated_time=payload.estimated_time,
        materials_needed=payload.materials_needed,
    )
    logger.info("course_created", course_id=course.id, user_id=user.id)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": f"/courses/{course.id}"})

@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def update_course(payload: CourseWrite = Depends(validated_body(CourseWrite, COURSE_RULES)),
                  course: Course = Depends(require_course_owner),
                  db: Session = Depends(get_db)):
    # optional fields left out of the body keep their stored value
    changes = payload.model_dump(include=payload.model_fields_set | {"title", "description"})
    db_queries_total.inc()
    CourseRepository(db).update(course.id, **changes)
    logger.info("course_updated", course_id=course.id, fields=sorted(changes))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_course(course: Course = Depends(require_course_owner),
                  db: Session = Depends(get_db)):
    db_queries_total.inc()
    CourseRepository(db).delete(course.id)
    logger.info("course_deleted", course_id=course.id, user_id=course.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
