from course_catalog.interfaces.http.validation import check_rules, required, email_address, is_present, is_email
from course_catalog.interfaces.http.routers.users import USER_RULES
from course_catalog.interfaces.http.routers.courses import COURSE_RULES


def test_is_present_rejects_empty_values():
    for value in (None, "", "   ", 0, False, [], {}):
        assert not is_present(value)
    for value in ("x", " x ", 1, True):
        assert is_present(value)


def test_is_email():
    assert is_email("alice@example.com")
    assert is_email("  alice@example.com ")
    assert not is_email("alice")
    assert not is_email("alice@")
    assert not is_email(42)


def test_missing_course_fields_are_all_listed():
    errors = check_rules({}, COURSE_RULES)
    assert errors == [
        'Please provide a value for "title"',
        'Please provide a value for "description"',
    ]


def test_valid_course_body_passes():
    assert check_rules({"title": "T", "description": "D"}, COURSE_RULES) == []


def test_email_format_checked_only_when_present():
    errors = check_rules({"firstName": "A", "lastName": "B", "password": "p"}, USER_RULES)
    assert errors == ['Please provide a value for "emailAddress"']

    errors = check_rules(
        {"firstName": "A", "lastName": "B", "emailAddress": "nope", "password": "p"},
        USER_RULES,
    )
    assert errors == ['Email must be a valid "email address"']


def test_custom_message():
    rules = [required("name", "Name, please"), email_address("contact")]
    assert check_rules({"contact": "x@example.com"}, rules) == ["Name, please"]


def test_is_email_allows_special_use_domains():
    assert is_email("user@example.test")
    assert is_email("josé@example.com")
