from sqlalchemy import Column, Integer, Text

from lively_langs.database import Base


class Language(Base):
    """Language model for database.

    Each row owns a word table named after its id (see ``words.models``).
    """

    __tablename__ = "languages"
    # Ids name word tables, so a deleted language's id must never come back
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, unique=True, nullable=False, index=True)
    # Pipe-delimited: "|es|esp|"
    aliases = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    def __repr__(self):
        return f"<Language(id={self.id}, name='{self.name}', aliases='{self.aliases}')>"
