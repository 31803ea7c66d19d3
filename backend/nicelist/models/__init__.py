"""
Nice List Backend — ORM Models
================================

Importing this package registers every table on `Base.metadata`.

Table relationships:
    people ──< infractions ──< appeals
       └──────────────────────<┘

Every foreign key is declared ON DELETE CASCADE: deleting a person removes
their infractions and appeals; deleting an infraction removes its appeals.
"""

from nicelist.models.appeal import Appeal, AppealStatus
from nicelist.models.infraction import Infraction
from nicelist.models.person import Person

__all__ = ["Appeal", "AppealStatus", "Infraction", "Person"]
