import structlog
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ....application.use_cases.register_user import RegisterUser
from ....domain.entities import User
from ....infrastructure.db import get_db
from ....infrastructure.metrics import db_queries_total
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher
from ..authz import get_current_user
from ..schemas import UserCreate, UserOut
from ..validation import validated_body, required, email_address

router = APIRouter(prefix="/users", tags=["users"])
logger = structlog.get_logger()

USER_RULES = [
    required("firstName"),
    required("lastName"),
    required("emailAddress"),
    email_address("emailAddress"),
    required("password"),
]

@router.get("", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return UserOut.model_validate(user)

@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_user(payload: UserCreate = Depends(validated_body(UserCreate, USER_RULES)),
                db: Session = Depends(get_db)):
    db_queries_total.inc()
    uc = RegisterUser(repo=UserRepository(db), hasher=PasswordHasher())
    user = uc.execute(payload.first_name, payload.last_name, payload.email_address, payload.password)
    logger.info("user_created", user_id=user.id)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
