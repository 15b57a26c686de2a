from storm.zope.schema import ZSchema


def createSchema():
    """Create the L{Schema} instance for the main database."""
    from socialdb.schema import main as patches

    return ZSchema(CREATE, DROP, DELETE, patches)


# The statements below produce a schema with every patch applied.  Patches
# only need to bring older databases to the same state.
CREATE = [
    """
    CREATE TABLE entities (
        guid INTEGER NOT NULL PRIMARY KEY,
        type INTEGER NOT NULL,
        subtype TEXT,
        owner_guid INTEGER NOT NULL DEFAULT 0,
        container_guid INTEGER NOT NULL DEFAULT 0,
        enabled BOOLEAN NOT NULL DEFAULT 1,
        time_created INTEGER NOT NULL)
    """,
    """
    CREATE INDEX entities_type_subtype_idx ON entities (type, subtype)
    """,
    """
    CREATE INDEX entities_owner_guid_idx ON entities (owner_guid)
    """,

    """
    CREATE TABLE private_settings (
        id INTEGER NOT NULL PRIMARY KEY,
        entity_guid INTEGER NOT NULL REFERENCES entities ON DELETE CASCADE,
        name TEXT NOT NULL,
        value TEXT NOT NULL,
        UNIQUE(entity_guid, name))
    """,
    """
    CREATE INDEX private_settings_name_idx ON private_settings (name)
    """,
    """
    CREATE INDEX private_settings_value_idx ON private_settings (value)
    """,
]


DROP = [
    'DROP TABLE private_settings',
    'DROP TABLE entities',
]


DELETE = [
    'DELETE FROM private_settings',
    'DELETE FROM entities',
]
