"""MongoDB connection and Beanie document registration."""
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.models import (
    User,
    District,
    School,
    SchoolClass,
    Student,
    AttendanceRecord,
    Alert,
    Intervention,
    Role,
)


_client = None


async def db_startup():
    """Connect to MongoDB and initialize Beanie ODM."""
    global _client
    _client = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=5000)
    await init_beanie(
        database=_client[settings.mongodb_db_name],
        document_models=[
            User,
            District,
            School,
            SchoolClass,
            Student,
            AttendanceRecord,
            Alert,
            Intervention,
            Role,
        ],
    )


async def db_shutdown():
    """Close MongoDB connection."""
    global _client
    if _client:
        _client.close()
        _client = None
