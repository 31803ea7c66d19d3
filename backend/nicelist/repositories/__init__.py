"""
Nice List Backend — Repository Layer
======================================

What:  Typed operations over the people, infractions and appeals tables.
       This is the only layer allowed to touch storage.
How:   Each repository is constructed with an explicit AsyncSession. Routes
       build one per request from the request-scoped session.

Repository Inventory:
    - PersonRepository:     list / get / add / judge / delete people
    - InfractionRepository: list a person's infractions / record an infraction
    - AppealRepository:     submit / list pending / review appeals

Shared contract:
    - Creates use INSERT ... RETURNING id, so the generated id comes back in
      the same statement as the insert.
    - Reads that find nothing raise NotFoundError.
    - Mutations by id (judge, delete, review) report success whether or not a
      row matched.
    - Missing foreign-key targets raise ReferentialIntegrityError; any other
      storage failure raises DatabaseError. Nothing is retried.
"""

from nicelist.repositories.appeal_repository import AppealRepository
from nicelist.repositories.infraction_repository import InfractionRepository
from nicelist.repositories.person_repository import PersonRepository

__all__ = ["AppealRepository", "InfractionRepository", "PersonRepository"]
