from sqlalchemy import Column, Integer, MetaData, Table, Text


def word_table_name(language_id: int) -> str:
    """Physical name of a language's word table: its id, e.g. ``"1"``."""
    if not isinstance(language_id, int) or isinstance(language_id, bool):
        raise TypeError(f"word tables are addressed by integer id, got {language_id!r}")
    return str(language_id)


def word_table(language_id: int) -> Table:
    """Build the Table for a language's words.

    Every language gets its own table; the name only ever comes from the
    integer id, so no client string reaches the DDL or the FROM clause.
    Each call uses a private MetaData so tables never accumulate globally.
    """
    return Table(
        word_table_name(language_id),
        MetaData(),
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("word", Text, nullable=False),
        Column("definition", Text, nullable=False, default=""),
        # Pipe-delimited: "|gatito|michi|"
        Column("aliases", Text, nullable=False, default=""),
        Column("notes", Text, nullable=False, default=""),
    )
