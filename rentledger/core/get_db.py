from fastapi import Request


async def get_db_async(request: Request):
    session = request.app.state.database.session_factory()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
