from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

IN_MEMORY = ":memory:"


def _database_url(db_file: str | Path) -> str:
    if str(db_file) == IN_MEMORY:
        return "sqlite://"
    return f"sqlite:///{Path(db_file)}"


def init_db(echo: bool = False, *, db_file: str | Path = "revolut_exchanges.db", reset: bool = False) -> Session:
    """Open a session on a SQLite file (or ``":memory:"``) with the schema created.

    ``reset`` removes an existing file first so each run starts from an empty table.
    """
    if reset and str(db_file) != IN_MEMORY:
        Path(db_file).unlink(missing_ok=True)

    engine: Engine = create_engine(_database_url(db_file), echo=echo)

    Base.metadata.create_all(engine)
    return sessionmaker(engine)()
