"""
Servizio generico per le risorse possedute da un utente.

Note, note personalizzate, todo e contatti seguono lo stesso schema:
elenco, creazione, aggiornamento e cancellazione, sempre filtrati per
proprietario. La logica è scritta una volta sola qui e configurata per
risorsa tramite ``FieldSpec``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Type

from notelog.services.auth_service import Principal
from notelog.services.errors import NotFound, ValidationError
from notelog.services.logging import log_structured_event
from notelog.services.unit_of_work import UnitOfWork

INVALID_VALUE_MESSAGE = "Invalid field value"


# --- Parser dei campi ------------------------------------------------------

def parse_text(value: Any) -> Optional[str]:
    """Stringa ripulita dagli spazi; i numeri vengono convertiti in testo."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(INVALID_VALUE_MESSAGE)
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        raise ValidationError(INVALID_VALUE_MESSAGE)
    return value.strip()


def parse_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    raise ValidationError(INVALID_VALUE_MESSAGE)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Data ISO 8601 (anche con suffisso 'Z') -> datetime naive in UTC.
    Stringa vuota o None azzerano il campo.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(INVALID_VALUE_MESSAGE)
    value = value.strip()
    if not value:
        return None
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(INVALID_VALUE_MESSAGE) from exc
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError as exc:
            # lo spostamento in UTC esce dagli anni 1..9999
            raise ValidationError(INVALID_VALUE_MESSAGE) from exc
    return parsed


def choice_parser(choices: Sequence[str]) -> Callable[[Any], Optional[str]]:
    def _parse(value: Any) -> Optional[str]:
        text = parse_text(value)
        if text and text not in choices:
            raise ValidationError(INVALID_VALUE_MESSAGE)
        return text

    return _parse


@dataclass(frozen=True)
class FieldSpec:
    """
    Regola per un campo accettato dall'API.

    - key: chiave JSON (camelCase, come il frontend)
    - attr: attributo del modello
    - required: non può essere assente o vuoto in creazione, né vuoto in aggiornamento
    - default: valore usato quando il campo è assente o vuoto
    """

    key: str
    attr: str
    required: bool = False
    parser: Callable[[Any], Any] = parse_text
    default: Any = None


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


class OwnedResourceService:
    """
    CRUD di una risorsa filtrato per ``Principal``.

    Il proprietario viene sempre preso dal principal, mai dal payload;
    un record di un altro utente produce NotFound come un id inesistente.
    """

    def __init__(
        self,
        name: str,
        label: str,
        repository: str,
        model_cls: Type,
        fields: Sequence[FieldSpec],
    ):
        self.name = name
        self.label = label
        self.repository = repository
        self.model_cls = model_cls
        self.fields = tuple(fields)

    def _repo(self, uow: UnitOfWork):
        return getattr(uow, self.repository)

    def _not_found(self) -> NotFound:
        return NotFound(f"{self.label} not found")

    def _clean_payload(self, data: Any, partial: bool) -> Dict[str, Any]:
        """
        Applica le FieldSpec al payload.

        In aggiornamento (partial) vengono considerati solo i campi presenti.
        Le chiavi sconosciute, compresi id e proprietario, sono ignorate.
        """
        if not isinstance(data, dict):
            raise ValidationError("Invalid JSON body")

        cleaned: Dict[str, Any] = {}
        missing: List[str] = []
        for rule in self.fields:
            if rule.key not in data and partial:
                continue

            try:
                value = rule.parser(data.get(rule.key))
            except ValidationError:
                log_structured_event(
                    f"{self.name}_validation_failed",
                    message="Valore non valido",
                    level="warning",
                    field=rule.key,
                )
                raise

            if _is_empty(value) and rule.default is not None:
                value = rule.default
            if rule.required and _is_empty(value):
                missing.append(rule.key)
                continue
            cleaned[rule.attr] = value

        if missing:
            log_structured_event(
                f"{self.name}_validation_failed",
                message="Campi obbligatori mancanti",
                level="warning",
                fields=missing,
            )
            raise ValidationError("Missing required fields")
        return cleaned

    def list(self, principal: Principal) -> List[Any]:
        """Tutti i record del principal, nell'ordine della risorsa."""
        with UnitOfWork() as uow:
            return self._repo(uow).list_for_owner(principal.id)

    def create(self, principal: Principal, data: Any) -> Any:
        """Valida i campi e crea il record intestato al principal."""
        cleaned = self._clean_payload(data, partial=False)
        with UnitOfWork() as uow:
            record = self.model_cls(user_id=principal.id, **cleaned)
            self._repo(uow).add(record)
            uow.commit()
            log_structured_event(
                f"{self.name}_created",
                message=f"{self.label} creato",
                user_id=principal.id,
                record_id=record.id,
            )
            return record

    def update(self, principal: Principal, record_id: int, data: Any) -> Any:
        """Aggiorna solo i campi presenti nel payload."""
        cleaned = self._clean_payload(data, partial=True)
        with UnitOfWork() as uow:
            record = self._repo(uow).get_owned(record_id, principal.id)
            if record is None:
                raise self._not_found()
            for attr, value in cleaned.items():
                setattr(record, attr, value)
            uow.commit()
            log_structured_event(
                f"{self.name}_updated",
                message=f"{self.label} aggiornato",
                user_id=principal.id,
                record_id=record_id,
                fields=sorted(cleaned),
            )
            return record

    def delete(self, principal: Principal, record_id: int) -> None:
        with UnitOfWork() as uow:
            repo = self._repo(uow)
            record = repo.get_owned(record_id, principal.id)
            if record is None:
                raise self._not_found()
            repo.delete(record)
            uow.commit()
            log_structured_event(
                f"{self.name}_deleted",
                message=f"{self.label} eliminato",
                user_id=principal.id,
                record_id=record_id,
            )
