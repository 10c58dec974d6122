from sqlalchemy import Column, Integer, String, Text

from wordref.core.database import Base


class ConjugationRecord(Base):
    """Cached conjugation page for one verb"""
    __tablename__ = "conjugations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    language = Column(String(32), nullable=False, index=True)  # french, italian, ...
    verb = Column(String(255), nullable=False, index=True)  # Canonical infinitive
    verb_conjugations_json = Column(Text, nullable=False)  # Serialized VerbConjugations


class DefinitionRecord(Base):
    """Cached definitions page for one word and language pair"""
    __tablename__ = "definitions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    word = Column(String(255), nullable=False, index=True)
    to_language = Column(String(32), nullable=False)
    from_language = Column(String(32), nullable=False)
    word_definitions_json = Column(Text, nullable=False)  # Serialized WordDefinitions


class RootWordRecord(Base):
    """Alias from a typed (surface) form to its infinitive"""
    __tablename__ = "rootwords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    language = Column(String(32), nullable=False, index=True)
    word = Column(String(255), nullable=False, index=True)
    rootword = Column(String(255), nullable=False)
