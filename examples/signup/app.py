"""Signup — registration form validated field by field and as a whole.

Demonstrates formschema's two entry points: ``validate_field()`` for
live feedback while the user types, and ``validate_form()`` on submit.
Registrations are stored in memory — this is a demo, not production auth.

Demonstrates:
- Descriptors as plain dicts, compiled once at import time
- Per-field ``messages`` overrides and project-wide ``SchemaConfig.messages``
- ``FormResult`` truthiness and ``as_dict()`` for a JSON-style response

Run:
    python app.py
"""

from formschema import SchemaConfig, create_validation_schema, validate_field, validate_form

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

FIELDS = [
    {"name": "username", "type": "string", "required": True, "min": 3, "max": 20},
    {
        "name": "email",
        "type": "email",
        "required": True,
        "messages": {"string.email": "That doesn't look like an email address"},
    },
    {"name": "age", "type": "number", "min": 13},
    {"name": "birthday", "type": "date"},
]

schema = create_validation_schema(
    FIELDS,
    SchemaConfig(messages={"any.required": "Please enter your {#label}"}),
)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

_users: list[dict[str, object]] = []


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def on_change(name: str, value: object) -> dict[str, str | None]:
    """Live validation for one input."""
    return validate_field(schema, name, value)


def submit(form: dict[str, object]) -> dict[str, object]:
    """Validate the whole form and register the user when it passes."""
    result = validate_form(schema, form)
    if result:
        _users.append({name: form.get(name) for name in schema})
    return result.as_dict()


def main() -> None:
    print(on_change("username", "al"))
    print(submit({"username": "alice", "email": "alice@example", "age": "12"}))
    print(submit({"username": "alice", "email": "alice@example.com", "age": 30}))
    print(f"{len(_users)} registered user(s)")


if __name__ == "__main__":
    main()
