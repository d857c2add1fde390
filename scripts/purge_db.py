import asyncio

from sqlalchemy import text

from summarist.infrastructure.database import async_session_factory


async def clear_data():
    async with async_session_factory() as session:
        result = await session.execute(text("DELETE FROM summaries"))
        await session.commit()
        print(f"Database cleared! Removed {result.rowcount} summaries.")


asyncio.run(clear_data())
