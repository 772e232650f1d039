"""Repository for professional (tradesperson) profiles."""

from boto3.dynamodb.conditions import Attr

from homerepair.db.base import DynamoDBRepository
from homerepair.db.dynamodb_client import Collection
from homerepair.db.professionals.model import ProfessionalProfile
from homerepair.utils.logger import logger


class ProfessionalRepository(DynamoDBRepository):
    collection = Collection.PROFESSIONALS

    async def get(self, professional_id: str) -> ProfessionalProfile | None:
        item = self._get_item({"id": professional_id})
        return ProfessionalProfile.model_validate(item) if item else None

    async def upsert(self, profile: ProfessionalProfile) -> ProfessionalProfile:
        self._put_item(profile.to_document())
        logger.info(
            f"[ProfessionalRepository] Saved profile for professional {profile.id}"
        )
        return profile

    async def find_by_service(
        self,
        service: str,
        state: str | None = None,
        city: str | None = None,
        limit: int = 5,
    ) -> list[ProfessionalProfile]:
        """
        Find professionals offering a service.

        Narrowed by state when one is known, otherwise by service-area
        containment of the city, otherwise not narrowed at all.

        Args:
            service: Lowercase service keyword matched against servicesConcat
            state: State abbreviation
            city: City or suburb name
            limit: Maximum number of professionals returned

        Returns:
            list[ProfessionalProfile]: Matching profiles in scan order
        """
        condition = Attr("servicesConcat").contains(service.lower())
        if state:
            condition = condition & Attr("state").eq(state)
        elif city:
            condition = condition & Attr("serviceAreas").contains(city)

        items = self._scan(limit=limit, FilterExpression=condition)
        return [ProfessionalProfile.model_validate(item) for item in items]
