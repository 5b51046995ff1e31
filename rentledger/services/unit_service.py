import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from rentledger.core.breaker import CircuitBreaker
from rentledger.core.exceptions import NotFound
from rentledger.core.mapper import ORMMapper
from rentledger.core.paginate import PaginatePage
from rentledger.identity.supabase import AuthIdentity
from rentledger.models.models import Tenant, Unit
from rentledger.repos.property_repo import PropertyRepo
from rentledger.repos.tenant_repo import TenantRepo
from rentledger.repos.unit_repo import UnitRepo
from rentledger.schemas.schema import UnitCreate, UnitWithPropertyOut
from rentledger.services.auth_service import AuthService
from rentledger.services.provisioning_service import (
    PaymentGateway,
    Provisioned,
    ProvisioningResult,
    ProvisioningWorkflow,
    Skipped,
)

logger = logging.getLogger(__name__)


@dataclass
class UnitCreation:
    unit: Unit
    provisioning: ProvisioningResult
    tenant: Optional[Tenant] = None


class UnitService:
    def __init__(
        self,
        db,
        gateway: Optional[PaymentGateway] = None,
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.repo: UnitRepo = UnitRepo(db)
        self.property_repo: PropertyRepo = PropertyRepo(db)
        self.tenant_repo: TenantRepo = TenantRepo(db)
        self.auth: AuthService = AuthService(db)
        self.workflow: ProvisioningWorkflow = ProvisioningWorkflow(gateway, breaker)
        self.paginate: PaginatePage = PaginatePage()
        self.mapper: ORMMapper = ORMMapper()

    def _build_unit(self, data: UnitCreate, result: ProvisioningResult) -> Unit:
        unit = Unit(
            property_id=data.property_id,
            unit_number=data.unit_number,
            rent_amount=data.rent_amount,
        )
        unit.apply_tenant_snapshot(
            data.tenant_name,
            str(data.tenant_email) if data.tenant_email else None,
            data.tenant_phone,
        )
        if isinstance(result, Provisioned):
            unit.customer_code = result.customer_code
            unit.virtual_account_number = result.account_number
            unit.virtual_account_bank = result.bank_name
        return unit

    async def create_unit(self, data: UnitCreate, identity: AuthIdentity) -> UnitCreation:
        prop = await self.property_repo.get_for_landlord(data.property_id, identity.subject)
        if not prop:
            raise NotFound("Property")

        tenant_email = str(data.tenant_email) if data.tenant_email else None
        result = await self.workflow.provision(
            data.tenant_name, tenant_email, data.tenant_phone
        )

        try:
            unit = await self.repo.create(self._build_unit(data, result))
        except IntegrityError:
            if not isinstance(result, Provisioned):
                raise
            # Paystack hands back the existing customer for a known email.
            logger.warning(
                f"Customer code {result.customer_code} is already bound to another unit; "
                f"creating unit {data.unit_number} without a virtual account"
            )
            result = Skipped("customer code already bound to another unit")
            unit = await self.repo.create(self._build_unit(data, result))

        tenant = None
        if data.tenant_name:
            await self.auth.ensure_landlord(identity)
            tenant = await self.tenant_repo.create(
                landlord_id=identity.subject,
                name=data.tenant_name,
                email=tenant_email,
                phone_number=data.tenant_phone,
            )

        return UnitCreation(unit=unit, provisioning=result, tenant=tenant)

    async def get_unit(self, unit_id: str, identity: AuthIdentity) -> UnitWithPropertyOut:
        unit = await self.repo.get_for_landlord(unit_id, identity.subject, with_property=True)
        return self.mapper.found(unit, UnitWithPropertyOut, "Unit")

    async def list_units(
        self, identity: AuthIdentity, page: int = 1, per_page: int = 100
    ) -> List[UnitWithPropertyOut]:
        offset, limit = self.paginate.offset_limit(page, per_page)
        units = await self.repo.list_for_landlord(identity.subject, offset=offset, limit=limit)
        return self.mapper.many(units, UnitWithPropertyOut)
