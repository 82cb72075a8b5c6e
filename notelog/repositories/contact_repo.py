"""
Repository specifico per Contact.
L'elenco è in ordine alfabetico per nome.
"""
from notelog.models import Contact
from notelog.repositories.base import OwnedRepository


class ContactRepository(OwnedRepository[Contact]):
    def __init__(self, session):
        super().__init__(session, Contact)

    def ordering(self) -> tuple:
        return (Contact.name.asc(), Contact.id.asc())
