from dataclasses import dataclass

@dataclass(frozen=True)
class User:
    id: int | None
    first_name: str
    last_name: str
    email_address: str

@dataclass(frozen=True)
class Course:
    id: int | None
    title: str
    description: str
    user_id: int
    estimated_time: str | None = None
    materials_needed: str | None = None
    owner: User | None = None
