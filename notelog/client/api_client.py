"""
Client HTTP per le API NoteLog.

Il client è un oggetto costruito esplicitamente: URL base, store di
sessione e sessione HTTP vengono iniettati (niente singleton di modulo).
Il token viene letto dallo store a ogni richiesta.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from notelog.client.session import SessionStore

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong"


class APIError(Exception):
    """Errore restituito dall'API (status HTTP) o di rete (status None)."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class NoteLogClient:
    def __init__(
        self,
        base_url: str,
        session_store: Optional[SessionStore] = None,
        http: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session_store = session_store or SessionStore()
        self.http = http or requests.Session()
        self.timeout = timeout

        self.notes = ResourceClient(self, "notes")
        self.todos = ResourceClient(self, "todos")
        self.contacts = ResourceClient(self, "contacts")
        self.custom_notes = ResourceClient(self, "custom-notes")

    # --- HTTP --------------------------------------------------------------

    def _headers(self, authenticated: bool) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self.session_store.get_token() if authenticated else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        authenticated: bool = True,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.http.request(
                method,
                url,
                json=payload,
                headers=self._headers(authenticated),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Richiesta %s %s fallita: %s", method, url, exc)
            raise APIError(str(exc) or DEFAULT_ERROR_MESSAGE) from exc

        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: requests.Response) -> Any:
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = DEFAULT_ERROR_MESSAGE
            if isinstance(data, dict) and data.get("message"):
                message = data["message"]
            raise APIError(message, response.status_code)

        if data is None:
            raise APIError("Invalid response body", response.status_code)
        return data

    # --- Auth --------------------------------------------------------------

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        data = self.request(
            "POST",
            "/auth/register",
            {"username": username, "email": email, "password": password},
            authenticated=False,
        )
        self.session_store.save(data["token"], data["user"])
        return data["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self.request(
            "POST",
            "/auth/login",
            {"email": email, "password": password},
            authenticated=False,
        )
        self.session_store.save(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session_store.clear()

    def get_profile(self) -> Dict[str, Any]:
        return self.request("GET", "/auth/me")

    def check_session(self) -> bool:
        """
        Verifica che il token salvato sia ancora utilizzabile.

        Se il token è scaduto o l'utente non esiste più, la sessione
        locale viene svuotata.
        """
        if not self.session_store.is_authenticated:
            return False
        try:
            self.get_profile()
        except APIError as exc:
            logger.info("Sessione non più valida (%s), logout locale", exc.message)
            self.session_store.clear()
            return False
        return True


class ResourceClient:
    """Operazioni CRUD su una risorsa (/notes, /todos, ...)."""

    def __init__(self, client: NoteLogClient, resource: str):
        self.client = client
        self.resource = resource

    def list(self) -> List[Dict[str, Any]]:
        return self.client.request("GET", f"/{self.resource}")

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.request("POST", f"/{self.resource}", data)

    def update(self, record_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.request("PUT", f"/{self.resource}/{record_id}", data)

    def delete(self, record_id: int) -> None:
        self.client.request("DELETE", f"/{self.resource}/{record_id}")
