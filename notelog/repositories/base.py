"""
Generic Repository Pattern.
Fornisce le operazioni CRUD base per qualsiasi modello SQLAlchemy,
più la variante "posseduta" filtrata per proprietario.
"""
from typing import Generic, List, Optional, Type, TypeVar

from notelog.extensions import db

# Definisce un tipo generico T che deve essere un modello SQLAlchemy
T = TypeVar("T", bound=db.Model)

MAX_RECORD_ID = 2**63


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        """Aggiunge l'entità alla sessione."""
        self.session.add(entity)
        return entity

    def get_by_id(self, id: int) -> Optional[T]:
        """Recupera per Primary Key."""
        return self.session.get(self.model_cls, id)

    def list_all(self) -> List[T]:
        """Ritorna tutti i record."""
        return self.session.query(self.model_cls).all()

    def delete(self, entity: T) -> None:
        """Cancella l'entità."""
        self.session.delete(entity)


class OwnedRepository(SqlAlchemyRepository[T]):
    """
    Repository per risorse che appartengono a un utente (colonna ``user_id``).

    Ogni lettura passa dal filtro sul proprietario: un record di un altro
    utente non viene mai restituito, esattamente come se non esistesse.
    Le sottoclassi definiscono ``ordering()`` per l'elenco.
    """

    def _owned_query(self, owner_id: int):
        return self.session.query(self.model_cls).filter(
            self.model_cls.user_id == owner_id
        )

    def ordering(self) -> tuple:
        return (self.model_cls.id.asc(),)

    def list_for_owner(self, owner_id: int) -> List[T]:
        """Tutti i record del proprietario, nell'ordine della risorsa."""
        return self._owned_query(owner_id).order_by(*self.ordering()).all()

    def get_owned(self, record_id: int, owner_id: int) -> Optional[T]:
        """Record per id solo se appartiene a ``owner_id``, altrimenti None."""
        # Id fuori dal range INTEGER a 64 bit: nessun record può averlo
        if not 0 < record_id < MAX_RECORD_ID:
            return None
        return (
            self._owned_query(owner_id)
            .filter(self.model_cls.id == record_id)
            .first()
        )

    def count_for_owner(self, owner_id: int) -> int:
        return self._owned_query(owner_id).count()
