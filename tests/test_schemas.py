import pytest
from pydantic import ValidationError

from app.database.models import Person, UserRole
from app.schemas.user import PASSWORD_MESSAGE, PersonCreate


def make_person(**overrides):
    data = {
        "name": " Jane Doe ",
        "email": "  Foo@Bar.com ",
        "mobile": "+8801712345678",
        "password": "hashed",
    }
    data.update(overrides)
    return Person(**data)


def test_person_normalizes_name_and_email():
    person = make_person()
    assert person.name == "Jane Doe"
    assert person.email == "foo@bar.com"
    assert person.role == UserRole.USER.value


@pytest.mark.parametrize("field", ["name", "email", "mobile", "password"])
def test_person_requires_non_empty_fields(field):
    with pytest.raises(ValidationError):
        make_person(**{field: "   " if field in ("name", "email") else ""})


def test_person_role_is_restricted():
    with pytest.raises(ValidationError):
        make_person(role="owner")
    assert make_person(role="admin").role == "admin"


def test_person_document_round_trip_keeps_id_as_string():
    from bson import ObjectId

    oid = ObjectId()
    document = make_person().to_document()
    assert "_id" not in document
    assert document["role"] == "user"

    person = Person.from_document({**document, "_id": oid})
    assert person.id == str(oid)
    public = person.public_dict()
    assert public["id"] == str(oid)
    assert "password" not in public


def test_person_create_defaults_role_for_blank_input():
    person = PersonCreate(
        name="Jane", email="jane@example.com", mobile="+8801712345678",
        password="Secret#123", role="",
    )
    assert person.role == "user"


@pytest.mark.parametrize(
    "password",
    ["Sh#rt1", "alllowercase#1", "ALLUPPER#1", "NoSymbol123", "NoDigits#x"],
)
def test_person_create_password_rules(password):
    data = dict(name="Jane", email="jane@example.com", mobile="+8801712345678", password=password)
    with pytest.raises(ValidationError) as excinfo:
        PersonCreate(**data)
    assert excinfo.value.errors()[0]["msg"] == PASSWORD_MESSAGE


def test_person_create_allows_hyphenated_names():
    person = PersonCreate(
        name="Mary-Jane Watson", email="MJ@Example.com", mobile="01712345678",
        password="Secret#123",
    )
    assert person.name == "Mary-Jane Watson"
    assert person.email == "mj@example.com"
