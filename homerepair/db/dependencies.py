"""
FastAPI dependencies for the document store.

Each request gets a repository bound to the shared DynamoDB resource.
"""

from homerepair.db.conversations.repository import ConversationRepository
from homerepair.db.jobs.repository import JobRepository
from homerepair.db.products.repository import ProductRepository
from homerepair.db.professionals.repository import ProfessionalRepository
from homerepair.db.users.repository import UserRepository


def get_user_repository() -> UserRepository:
    return UserRepository()


def get_professional_repository() -> ProfessionalRepository:
    return ProfessionalRepository()


def get_job_repository() -> JobRepository:
    return JobRepository()


def get_conversation_repository() -> ConversationRepository:
    return ConversationRepository()


def get_product_repository() -> ProductRepository:
    return ProductRepository()
