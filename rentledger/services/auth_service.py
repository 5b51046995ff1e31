import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from rentledger.core.exceptions import ValidationError
from rentledger.core.mapper import ORMMapper
from rentledger.core.settings import settings
from rentledger.identity.supabase import AuthIdentity
from rentledger.models.models import Landlord
from rentledger.repos.landlord_repo import LandlordRepo
from rentledger.schemas.schema import LandlordOut, SyncOut

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db, default_name: Optional[str] = None):
        self.repo: LandlordRepo = LandlordRepo(db)
        self.mapper: ORMMapper = ORMMapper()
        self.default_name = default_name or settings.DEFAULT_LANDLORD_NAME

    async def ensure_landlord(
        self, identity: AuthIdentity, name: Optional[str] = None
    ) -> Landlord:
        """
        Upsert by primary key. Safe to call concurrently and repeatedly:
        the first caller inserts, everyone else reads the same row back.
        """
        existing = await self.repo.get_by_id(identity.subject)
        if existing:
            return existing

        if not identity.email:
            raise ValidationError("email", "identity provider returned no email")

        try:
            created = await self.repo.insert_if_absent(
                landlord_id=identity.subject,
                email=identity.email.strip().lower(),
                name=name or self.default_name,
            )
        except IntegrityError:
            raise ValidationError(
                "email", "already registered to another account"
            )

        if created:
            logger.info(f"New landlord created: {identity.email}")

        landlord = await self.repo.get_by_id(identity.subject)
        if landlord is None:
            raise RuntimeError(f"Landlord {identity.subject} vanished after upsert")
        return landlord

    async def sync(self, identity: AuthIdentity, name: Optional[str] = None) -> SyncOut:
        landlord = await self.ensure_landlord(identity, name=name)
        return SyncOut(status="synced", user=self.mapper.one(landlord, LandlordOut))
