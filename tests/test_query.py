import pytest

from taskgate.core.query import UpdateBuilder


def test_single_field():
    sql, params = (
        UpdateBuilder("users")
        .set("name", "Bob")
        .where("id", 7)
        .returning("id", "name", "email")
        .build()
    )
    assert sql == "UPDATE users SET name = :p1 WHERE id = :p2 RETURNING id, name, email"
    assert params == {"p1": "Bob", "p2": 7}


def test_parameter_index_follows_supplied_fields():
    builder = UpdateBuilder("users")
    builder.set("email", "new@x.com").set("password_hash", "$argon2id$...")
    builder.where("id", 3)

    sql, params = builder.build()
    assert sql == "UPDATE users SET email = :p1, password_hash = :p2 WHERE id = :p3"
    assert params == {"p1": "new@x.com", "p2": "$argon2id$...", "p3": 3}
    assert builder.columns == ["email", "password_hash"]


def test_multiple_filters_are_anded():
    sql, _ = UpdateBuilder("tasks").set("title", "T").where("id", 1).where("user_id", 2).build()
    assert sql.endswith("WHERE id = :p2 AND user_id = :p3")


def test_values_are_never_inlined():
    sql, params = UpdateBuilder("users").set("name", "x'; DROP TABLE users; --").build()
    assert "DROP" not in sql
    assert params["p1"] == "x'; DROP TABLE users; --"


def test_empty_builder_cannot_build():
    builder = UpdateBuilder("users").where("id", 1)
    assert builder.is_empty
    with pytest.raises(ValueError):
        builder.build()


@pytest.mark.parametrize("name", ["name; --", "1col", "users.name", ""])
def test_invalid_identifiers(name):
    with pytest.raises(ValueError):
        UpdateBuilder("users").set(name, "x")


def test_invalid_table():
    with pytest.raises(ValueError):
        UpdateBuilder("users u")


def test_statement_returns_text_clause():
    statement, params = UpdateBuilder("users").set("name", "Bob").where("id", 1).statement()
    assert str(statement) == "UPDATE users SET name = :p1 WHERE id = :p2"
    assert params == {"p1": "Bob", "p2": 1}
