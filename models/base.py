from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData
from sqlalchemy.dialects import mysql, postgresql, sqlite

metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
})

db = SQLAlchemy(metadata=metadata)


def upsert(model, values: dict, index_elements: list, update: dict):
    """
    Insert a row or update it in place when the key already exists.

    Uses the dialect's native conflict clause so the primary key / unique
    constraint decides, not a read-then-write in Python.
    """
    dialect = db.session.get_bind().dialect.name

    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
        stmt = stmt.on_conflict_do_update(index_elements=index_elements, set_=update)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
        stmt = stmt.on_conflict_do_update(index_elements=index_elements, set_=update)
    elif dialect in ("mysql", "mariadb"):
        stmt = mysql.insert(model).values(**values).on_duplicate_key_update(**update)
    else:
        raise NotImplementedError(f"upsert not supported for dialect '{dialect}'")

    return db.session.execute(stmt)
