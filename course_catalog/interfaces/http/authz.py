from base64 import b64decode

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from ...application.errors import AuthenticationError
from ...application.use_cases.authenticate_user import AuthenticateUser
from ...application.use_cases.course_ownership import LoadOwnedCourse
from ...domain.entities import Course, User
from ...infrastructure.db import get_db
from ...infrastructure.metrics import auth_failures_total, db_queries_total
from ...infrastructure.repositories import UserRepository, CourseRepository
from ...infrastructure.security import PasswordHasher

logger = structlog.get_logger()

def record_failure(e: AuthenticationError) -> None:
    auth_failures_total.inc()
    logger.warning("authentication_failed", reason=e.reason)

class UTF8HTTPBasic(HTTPBasic):
    """HTTPBasic that decodes credentials as UTF-8 instead of ASCII.

    A missing or non-Basic header yields ``None``; a header that cannot be
    decoded raises the generic 401.
    """

    async def __call__(self, request: Request) -> HTTPBasicCredentials | None:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic":
            return None
        try:
            # binascii.Error and UnicodeDecodeError are both ValueErrors
            data = b64decode(param, validate=True).decode("utf-8")
        except ValueError:
            data = ""
        username, separator, password = data.partition(":")
        if not separator:
            e = AuthenticationError("Malformed basic auth header")
            record_failure(e)
            raise e
        return HTTPBasicCredentials(username=username, password=password)

basic = UTF8HTTPBasic(auto_error=False)

def get_current_user(creds: HTTPBasicCredentials | None = Depends(basic),
                     db: Session = Depends(get_db)) -> User:
    try:
        if creds is None:
            raise AuthenticationError("Auth header not found")
        db_queries_total.inc()
        user = AuthenticateUser(repo=UserRepository(db), hasher=PasswordHasher()).execute(
            creds.username, creds.password)
    except AuthenticationError as e:
        record_failure(e)
        raise
    logger.info("authentication_succeeded", user_id=user.id)
    return user

def require_course_owner(course_id: int,
                         user: User = Depends(get_current_user),
                         db: Session = Depends(get_db)) -> Course:
    # get_current_user is cached per request, so this is the same identity the route sees
    db_queries_total.inc()
    return LoadOwnedCourse(CourseRepository(db)).execute(course_id, user)
