from src.user_directory.user_directory.database.bootstrap import render_create_table
from src.user_directory.user_directory.users.schema import USER_SCHEMA, FieldKind, FieldSpec, RecordSchema


def test_render_create_table_for_users():
    ddl = render_create_table(USER_SCHEMA)

    assert ddl.startswith("CREATE TABLE IF NOT EXISTS `users`")
    assert "`id` CHAR(32) CHARACTER SET ascii COLLATE ascii_bin NOT NULL" in ddl
    assert "`email` VARCHAR(255) COLLATE utf8mb4_unicode_ci NOT NULL" in ddl
    assert "`password_hash` VARCHAR(255) NOT NULL" in ddl
    assert "`qualification` JSON NOT NULL DEFAULT (JSON_ARRAY())" in ddl
    assert "`roles` JSON NOT NULL DEFAULT (JSON_ARRAY('Employee'))" in ddl
    assert "`active` TINYINT(1) NOT NULL DEFAULT 1" in ddl
    assert "PRIMARY KEY (`id`)" in ddl
    for name in ("username", "email", "contact"):
        assert f"KEY `ix_users_{name}` (`{name}`)" in ddl


def test_render_create_table_escapes_list_defaults():
    schema = RecordSchema(
        table="things",
        fields=(
            FieldSpec("id", FieldKind.ID, required=True),
            FieldSpec("tags", FieldKind.STRING_LIST, default=("it's",)),
        ),
    )

    assert "DEFAULT (JSON_ARRAY('it''s'))" in render_create_table(schema)


def test_schema_exposes_defaults_and_collated_fields():
    assert USER_SCHEMA.default_for("roles") == ("Employee",)
    assert USER_SCHEMA.default_for("qualification") == ()
    assert USER_SCHEMA.default_for("active") is True
    assert USER_SCHEMA.collated_fields == ("username", "email", "contact")
    assert USER_SCHEMA.primary_key.name == "id"
