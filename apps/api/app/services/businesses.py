"""Business profile service layer."""

from app.errors import not_found
from app.repositories.memory import BusinessRecord, InMemoryStore
from app.schemas.auth import Principal
from app.schemas.business import Business, UpdateBusinessRequest
from app.services.authorization import AuthorizationService, Relationship, ResourceKind


class BusinessService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._authz = AuthorizationService(store)

    def get_business(self, *, business_id: str) -> Business:
        record = self._store.get_business(business_id)
        if record is None:
            raise not_found()
        return self._to_business(record)

    def update_business(
        self,
        *,
        principal: Principal,
        business_id: str,
        payload: UpdateBusinessRequest,
    ) -> Business:
        self._authz.require(principal, ResourceKind.BUSINESS, business_id, Relationship.OWNER)

        changes = payload.model_dump(exclude_unset=True)
        if changes.get("website") is not None:
            changes["website"] = str(changes["website"])

        record = self._store.get_business(business_id)
        if record is None:
            raise not_found()
        return self._to_business(self._store.update_business(record, changes))

    @staticmethod
    def _to_business(record: BusinessRecord) -> Business:
        return Business(
            id=record.id,
            user_id=record.user_id,
            company_name=record.company_name,
            email=record.email,
            phone=record.phone,
            website=record.website,
            industry=record.industry,
            description=record.description,
            logo=record.logo,
            subscription_type=record.subscription_type,
            subscription_status=record.subscription_status,
            subscribed_at=record.subscribed_at,
            expires_at=record.expires_at,
            created_at=record.created_at,
        )
