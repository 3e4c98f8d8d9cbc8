"""
Model registration for migrations: import all models that should be migrated by Alembic here.
When adding/removing apps, add/remove the corresponding imports here.
"""
from apps.person.models import Person

__all__ = ["Person"]
