from sqlalchemy.dialects import postgresql, sqlite


def insert_ignore_conflict(db, model, values: dict, conflict_columns: list[str]):
    """
    Build ``INSERT ... ON CONFLICT (cols) DO NOTHING`` for the session's dialect.

    The uniqueness constraint decides the race, so two concurrent callers
    with the same key end up with exactly one row.
    """
    dialect = db.get_bind().dialect.name

    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise NotImplementedError(f"Conflict-free insert not supported on {dialect}")

    return stmt.on_conflict_do_nothing(index_elements=conflict_columns)
