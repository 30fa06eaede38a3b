"""Declarative request-body checks.

A route lists the ``Rule``s its body must satisfy. ``check_rules`` runs them
all and returns every failure message, so the client can show each problem
next to its field. ``validated_body`` turns a rule list into a FastAPI
dependency that raises ``ValidationError`` (400) or hands the route a typed
payload.
"""
from dataclasses import dataclass
from typing import Any, Callable

from email_validator import validate_email, EmailNotValidError
from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ...application.errors import ValidationError


@dataclass(frozen=True)
class Rule:
    field: str
    message: str
    check: Callable[[Any], bool]


def is_present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # special-use domains such as example.test are fine for a catalog login
        validate_email(value.strip(), check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def required(field: str, message: str | None = None) -> Rule:
    return Rule(field, message or f'Please provide a value for "{field}"', is_present)


def email_address(field: str, message: str | None = None) -> Rule:
    return Rule(field, message or 'Email must be a valid "email address"', is_email)


def check_rules(body: dict, rules: list[Rule]) -> list[str]:
    errors = []
    failed = set()
    for rule in rules:
        # one message per field: stop at its first failing rule
        if rule.field in failed:
            continue
        if not rule.check(body.get(rule.field)):
            failed.add(rule.field)
            errors.append(rule.message)
    return errors


def _describe(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    return f'Invalid value for "{field}": {error.get("msg", "invalid")}'


def validated_body(schema: type[BaseModel], rules: list[Rule]):
    async def dependency(request: Request) -> BaseModel:
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        errors = check_rules(body, rules)
        if errors:
            raise ValidationError(errors)
        try:
            return schema.model_validate(body)
        except PydanticValidationError as e:
            raise ValidationError([_describe(err) for err in e.errors()])
    return dependency
