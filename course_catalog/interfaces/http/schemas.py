from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# wire format is camelCase, attributes stay snake_case
camel = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class UserCreate(BaseModel):
    model_config = camel
    first_name: str
    last_name: str
    email_address: str
    password: str

class UserOut(BaseModel):
    model_config = camel
    id: int
    first_name: str
    last_name: str
    email_address: str

class CourseWrite(BaseModel):
    model_config = camel
    title: str
    description: str
    estimated_time: str | None = None
    materials_needed: str | None = None

class CourseOut(BaseModel):
    model_config = camel
    id: int
    title: str
    description: str
    estimated_time: str | None = None
    materials_needed: str | None = None
    # responses are re-validated from their dumped form, so "User" is accepted too
    owner: UserOut | None = Field(
        default=None,
        validation_alias=AliasChoices("owner", "User"),
        serialization_alias="User",
    )
